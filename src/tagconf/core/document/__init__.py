"""Document generation (marshal) and loading (unmarshal)."""
