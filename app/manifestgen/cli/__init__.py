"""Command-line interface for manifestgen."""
