"""Command-line interface for asana-hooks."""
