"""CLI commands for sortcheck."""
