"""Configuration for asana_hooks."""

from asana_hooks.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
