"""
Modern Teletext - fixed-grid page layout, navigation and keystroke handling.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
