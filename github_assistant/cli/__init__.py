"""Command-line interface for the GitHub assistant."""
