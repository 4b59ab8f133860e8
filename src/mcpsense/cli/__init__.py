"""Command-line interface for mcpsense."""
