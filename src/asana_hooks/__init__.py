"""Asana REST client, option resolution and webhook verification."""

__version__ = "0.1.0"
