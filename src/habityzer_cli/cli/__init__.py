"""Command routing, text rendering and the process entry point."""
