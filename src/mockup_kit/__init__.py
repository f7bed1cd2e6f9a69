"""Mockup manifest generation and sync server."""

__version__ = "0.1.0"
