"""Command-line interface for open-mail."""
