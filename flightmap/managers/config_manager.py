"""
Configuration management for the FlightMap application.

This module handles loading, saving, and validating application configuration
using Pydantic models for type safety and validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Tuple
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class APIConfig(BaseModel):
    """Configuration for the route data provider."""

    base_url: str = "http://localhost:8000/api"
    timeout_seconds: int = 10
    max_retries: int = 3


class SearchConfig(BaseModel):
    """Default search parameters."""

    default_origin: str = "LHR"
    default_destination: str = "HND"


class OverlayConfig(BaseModel):
    """Timing and placement of station overlays."""

    auto_reveal_delay_ms: int = Field(7500, ge=0, description="Delay before the origin overlay opens by itself")
    suppression_window_ms: int = Field(300, ge=0, description="Auto-reveal blackout after an origin overlay is closed")
    offset_distance: float = 160.0
    default_offset_x: float = -200.0
    origin_default_offset_y: float = 60.0
    origin_offset_y: float = 100.0


class MapConfig(BaseModel):
    """Initial map viewport and scene size."""

    center: Tuple[float, float] = (20.0, 0.0)  # (latitude, longitude)
    zoom: int = 2
    scene_width: int = 1440
    scene_height: int = 720


class DisplayConfig(BaseModel):
    """Configuration for display settings."""

    window_size: Tuple[int, int] = (1200, 800)


class ConfigData(BaseModel):
    """Main configuration data model."""

    api: APIConfig = APIConfig()
    search: SearchConfig = SearchConfig()
    overlay: OverlayConfig = OverlayConfig()
    map: MapConfig = MapConfig()
    display: DisplayConfig = DisplayConfig()


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
                platform configuration directory
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

        On Windows, uses AppData/Roaming/FlightMap/config.json
        On Linux, uses XDG_CONFIG_HOME/FlightMap/config.json or ~/.config/FlightMap/config.json

        Returns:
            Path: Default configuration file path
        """
        if os.name == "nt":  # Windows
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / "FlightMap" / "config.json"
        else:  # Linux/Unix
            xdg_config = os.environ.get("XDG_CONFIG_HOME")
            if xdg_config:
                return Path(xdg_config) / "FlightMap" / "config.json"
            return Path.home() / ".config" / "FlightMap" / "config.json"

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
            logger.info(f"Config file doesn't exist, creating default at: {self.config_path}")
            self.create_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.config = ConfigData(**data)
            logger.debug(f"Successfully loaded config from: {self.config_path}")
            return self.config
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}")
        except Exception as e:
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
                json.dump(config.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            self.config = config
            return True
        except Exception as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")
            return False

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        if not self.save_config(ConfigData()):
            raise ConfigurationError(f"Could not create default config at {self.config_path}")
