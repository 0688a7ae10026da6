"""
Business logic managers for the Traewelling desktop client.

This module contains configuration and theme management plus the managers
that own check-in and statistics state.
"""

from .config_manager import ConfigManager, ConfigData, ConfigurationError
from .theme_manager import ThemeManager
# Note: request-issuing managers are not imported here to avoid a circular import with api_manager

__all__ = [
    "ConfigManager",
    "ConfigData",
    "ConfigurationError",
    "ThemeManager",
]
