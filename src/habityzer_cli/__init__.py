"""Command-line client for the Habityzer task API."""

__version__ = "0.1.0"
