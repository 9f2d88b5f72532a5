"""Web interface for tidy-tools."""
