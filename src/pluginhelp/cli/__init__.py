"""Command-line interface for pluginhelp."""
