"""CLI command modules.

This package contains the CLI commands split into logical groups:
- config: Configuration management
- demo: Example workloads run through a worker pool
"""
