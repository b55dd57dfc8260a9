"""Schema declaration, tag parsing and traversal."""
