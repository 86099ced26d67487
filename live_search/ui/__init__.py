"""Qt widgets and host window for live search."""
