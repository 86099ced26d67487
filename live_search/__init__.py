"""Live incremental search across open text sources."""

__version__ = "0.1.0"
