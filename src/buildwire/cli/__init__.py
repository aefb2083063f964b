"""Command-line interface for buildwire."""

from .app import app

__all__ = ["app"]
