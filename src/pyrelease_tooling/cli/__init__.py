"""Command-line entry points for pyrelease."""
