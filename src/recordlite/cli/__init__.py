"""Command line interface for recordlite."""
