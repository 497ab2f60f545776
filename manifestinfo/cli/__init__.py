"""Command implementations for the manifestinfo CLI."""
