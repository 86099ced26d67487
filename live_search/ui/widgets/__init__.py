from .live_search_results import LiveSearchResultsWidget
from .query_pane import QueryPane

__all__ = ["LiveSearchResultsWidget", "QueryPane"]
