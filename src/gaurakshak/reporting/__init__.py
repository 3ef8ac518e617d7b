"""Report rendering and export for gaurakshak."""
