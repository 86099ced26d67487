"""Pure live-search services: sources, search, results and rendering."""
