"""
Configuration management for the Traewelling desktop client.

This module handles loading, saving, and validating application configuration
using Pydantic models for type safety and validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

TOKEN_PLACEHOLDER = "YOUR_TOKEN_HERE"


class APIConfig(BaseModel):
    """Configuration for Träwelling API access."""

    token: str = Field(TOKEN_PLACEHOLDER, description="Personal access token")
    base_url: str = "https://traewelling.de/api/v1"
    web_url: str = "https://traewelling.de"
    timeout_seconds: int = 10
    max_retries: int = 3
    rate_limit_per_minute: int = 60


class RefreshConfig(BaseModel):
    """Configuration for data refresh settings."""

    auto_enabled: bool = True
    interval_minutes: int = 2
    progress_interval_seconds: int = 5


class DisplayConfig(BaseModel):
    """Configuration for display settings."""

    theme: str = "dark"  # "dark" or "light"
    display_tags_in_card: bool = True
    display_long_date: bool = False


class UIConfig(BaseModel):
    """Configuration for UI state persistence."""

    window_size: tuple[int, int] = (720, 900)


class ConfigData(BaseModel):
    """Main configuration data model."""

    api: APIConfig = Field(default_factory=APIConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    # Id of the account the token belongs to; decides which cards are "own"
    logged_in_user_id: Optional[int] = None


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class ConfigManager:
    """
    Manages application configuration with file persistence.

    Handles loading configuration from JSON files, creating default
    configurations, and saving changes back to disk.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses the
                platform config directory
        """
        if config_path is None:
            self.config_path = self.get_default_config_path()
        else:
            self.config_path = Path(config_path)
        self.config: Optional[ConfigData] = None

        logger.debug(f"ConfigManager initialized with path: {self.config_path}")

    @staticmethod
    def get_default_config_path() -> Path:
        """
        Get the default configuration file path.

        On Windows, uses AppData/Roaming/Traewelling/config.json
        Elsewhere, uses XDG_CONFIG_HOME/Traewelling/config.json or
        ~/.config/Traewelling/config.json

        Returns:
            Path: Default configuration file path
        """
        if os.name == "nt":  # Windows
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / "Traewelling" / "config.json"
        else:
            xdg_config = os.environ.get("XDG_CONFIG_HOME")
            if xdg_config:
                return Path(xdg_config) / "Traewelling" / "config.json"
            return Path.home() / ".config" / "Traewelling" / "config.json"

        # Fallback to current directory for development
        return Path("config.json")

    def load_config(self) -> ConfigData:
        """
        Load configuration from file.

        If the configuration file doesn't exist, creates a default one.

        Returns:
            ConfigData: The loaded configuration

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        logger.debug(f"Loading config from: {self.config_path}")

        if not self.config_path.exists():
            logger.info(
                f"Config file doesn't exist, creating default at: {self.config_path}"
            )
            self.create_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.config = ConfigData(**data)
            logger.debug(f"Successfully loaded config from: {self.config_path}")
            return self.config
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration values: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to load config: {e}")

    def save_config(self, config: ConfigData) -> bool:
        """
        Save configuration to file.

        Args:
            config: Configuration data to save

        Returns:
            bool: True if saved successfully, False otherwise
        """
        logger.info(f"Saving config to: {self.config_path}")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(config.model_dump(), f, indent=2, ensure_ascii=False)

            self.config = config
            return True

        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")
            return False

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        self.save_config(ConfigData())

    def update_theme(self, theme: str) -> bool:
        """
        Update the theme setting and save to file.

        Args:
            theme: Theme name ("dark" or "light")

        Returns:
            bool: True if the theme was stored, False otherwise
        """
        if self.config is None:
            self.load_config()

        if self.config and theme in ["dark", "light"]:
            self.config.display.theme = theme
            return self.save_config(self.config)
        return False

    def validate_api_token(self) -> bool:
        """
        Check if an API token is configured.

        Returns:
            bool: True if a token is set, False otherwise
        """
        if self.config is None:
            self.load_config()

        if not self.config:
            return False

        token = self.config.api.token
        return bool(token) and token != TOKEN_PLACEHOLDER
