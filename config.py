"""
Configuration and constants for the broker record normalizer.

This module provides:
- The recognized date dialects and broker vocabulary
- Support for user-configurable settings via environment variables
- Loading overrides from YAML files
- Logging setup
"""
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern

import yaml

logger = logging.getLogger(__name__)

# =============================================================================
# Date Dialects
# =============================================================================

# YYYY-MM-DD
ISO_DATE_PATTERN: Pattern[str] = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# DD.MM.YYYY (de-DE and similar) or DD/MM/YYYY (en-GB and similar)
LOCALE_SHORT_DATE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4}"),
    re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}"),
]

# Four-digit years below this are treated as invalid
MIN_YEAR: int = 100

# =============================================================================
# Broker Vocabulary
# =============================================================================

# Exact, case-sensitive tokens used by the broker export
TRANSACTION_TYPE_VOCABULARY: Dict[str, str] = {
    "Kauf": "BUY",
    "Verkauf": "SELL",
}

# Column headers of a tabular transaction export, keyed by raw field
TRANSACTION_COLUMNS: Dict[str, str] = {
    "execution_date": "executionDate",
    "type": "type",
    "shares": "shares",
    "price": "price",
    "total_fees": "totalFees",
}

# =============================================================================
# Number Formats
# =============================================================================

# Markers stripped before a number is parsed
CURRENCY_MARKERS: List[str] = [
    r"€",
    r"EUR",
    r"\$",
    r"USD",
]

# Used when "1.500" or "1,500" could be either a decimal or a grouped integer
DEFAULT_AMBIGUOUS_NUMBER_FORMAT: str = "european"
NUMBER_FORMATS: List[str] = ["european", "international"]

# =============================================================================
# Application Info
# =============================================================================

APP_NAME: str = "Broker Record Normalizer"
APP_VERSION: str = "1.0.0"

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# =============================================================================
# Flexible Configuration System
# =============================================================================

class Config:
    """
    Flexible configuration manager that supports:
    - Environment variables
    - Custom YAML configuration files
    - Runtime overrides
    """

    _instance: Optional["Config"] = None
    _settings: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_defaults()
            cls._instance._load_custom_config()
            cls._instance._validate_settings()
        return cls._instance

    def _load_defaults(self) -> None:
        """Load default settings."""
        self._settings = {
            # Parsing settings
            "ambiguous_number_format": os.environ.get(
                "AMBIGUOUS_NUMBER_FORMAT", DEFAULT_AMBIGUOUS_NUMBER_FORMAT
            ).lower(),

            # Batch conversion settings
            "skip_invalid_records": os.environ.get(
                "SKIP_INVALID_RECORDS", "false"
            ).lower() == "true",

            # Logging
            "log_level": os.environ.get("LOG_LEVEL", "INFO").upper(),
        }

    def _load_custom_config(self) -> None:
        """Load custom configuration from YAML file if available."""
        config_paths = [
            Path.cwd() / "config.yaml",
            Path.cwd() / "config.yml",
            Path(__file__).parent / "config.yaml",
            Path.home() / ".brokerimport" / "config.yaml",
        ]

        for config_path in config_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        custom_config = yaml.safe_load(f) or {}
                        self._settings.update(custom_config)
                        logger.info("Loaded config from %s", config_path)
                        break
                except (OSError, yaml.YAMLError) as e:
                    logger.warning("Could not load config from %s: %s", config_path, e)

    def _validate_settings(self) -> None:
        """Replace unusable settings with their defaults."""
        number_format = str(self._settings.get("ambiguous_number_format", "")).lower()
        if number_format not in NUMBER_FORMATS:
            logger.warning(
                "Unknown ambiguous_number_format %r, using %r",
                self._settings.get("ambiguous_number_format"), DEFAULT_AMBIGUOUS_NUMBER_FORMAT
            )
            number_format = DEFAULT_AMBIGUOUS_NUMBER_FORMAT
        self._settings["ambiguous_number_format"] = number_format

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value at runtime."""
        self._settings[key] = value

    def reload(self) -> None:
        """Reload configuration from environment and files."""
        self._load_defaults()
        self._load_custom_config()
        self._validate_settings()


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding the normalizer.

    Args:
        level: Level name such as "DEBUG"; defaults to the configured log_level
    """
    level_name = (level or get_config().get("log_level", "INFO")).upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    logging.getLogger().setLevel(level_name)
