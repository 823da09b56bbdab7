"""Command-line interface for chordscan."""
