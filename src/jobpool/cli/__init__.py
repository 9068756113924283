"""Command line interface for jobpool."""
