"""Command line interfaces for tidy-tools."""
