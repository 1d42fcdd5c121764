"""Page stores: sources of pages for the navigation router."""
