"""Core type aliases."""
