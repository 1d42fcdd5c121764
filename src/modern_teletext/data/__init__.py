"""Bundled page sets."""
