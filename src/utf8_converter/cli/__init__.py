"""Command-line interface for UTF-8 conversion."""
