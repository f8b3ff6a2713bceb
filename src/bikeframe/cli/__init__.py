"""Command-line entry points for the bicycle frame calculator."""
