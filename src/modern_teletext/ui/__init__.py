"""Layout, rendering and keyboard input for the teletext screen."""
