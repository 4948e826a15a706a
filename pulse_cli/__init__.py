"""Command line interface for the pulse event dispatcher."""
