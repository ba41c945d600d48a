"""Configuration module."""

from src.config.logging import command_context, configure_logging, get_logger
from src.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "command_context",
]
