"""Command-line uploader for Mixcloud cloudcasts."""

__version__ = "1.0.0"
