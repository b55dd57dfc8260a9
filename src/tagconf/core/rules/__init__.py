"""Validation rule registry and the built-in catalog."""
