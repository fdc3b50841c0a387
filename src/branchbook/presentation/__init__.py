"""Presentation layers feeding the story engine."""
