"""Command-line interface for kubeschema."""
