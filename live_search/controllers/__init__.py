"""Session orchestration for live search."""

from .live_search_controller import LiveSearchController, LiveSearchSession

__all__ = ["LiveSearchController", "LiveSearchSession"]
