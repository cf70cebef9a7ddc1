"""Command-line interface for taskprop."""
