"""Command-line interface for tedswriter."""
