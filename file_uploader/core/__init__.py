"""Core: settings, uploaders configuration, and application bootstrap.

Single place for settings and per-uploader configuration.
"""

from file_uploader.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
