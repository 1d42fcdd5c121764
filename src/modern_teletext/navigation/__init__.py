"""Page navigation: routing, history and footer hints."""
