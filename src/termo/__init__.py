"""Command-line entry points for termo."""
