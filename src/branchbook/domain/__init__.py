"""Domain layer: page records, flags and session state."""
