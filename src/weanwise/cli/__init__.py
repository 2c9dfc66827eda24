"""Command line interface for weanwise."""
