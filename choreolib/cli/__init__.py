"""Command-line tools for choreolib."""
