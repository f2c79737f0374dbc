"""Configuration module for eventwire."""

from eventwire.config.logging import configure_logging, get_logger
from eventwire.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger"]
