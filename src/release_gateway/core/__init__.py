"""Core gateway infrastructure."""
