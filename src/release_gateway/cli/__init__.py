"""Command line interface for release_gateway."""
