"""Core engine: schema model, rules, and document transforms."""
