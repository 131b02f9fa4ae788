"""Terminal frame player."""
