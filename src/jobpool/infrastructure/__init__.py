"""Configuration and logging infrastructure for jobpool."""
