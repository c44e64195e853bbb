"""Environment-driven settings, see settings.py for every variable."""

from bloghub.config.settings import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
