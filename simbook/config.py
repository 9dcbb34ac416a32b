"""simbook Configuration System.

Loads and validates configuration from ~/.simbook/config.json.
Uses Pydantic for schema validation with sensible defaults.

Usage:
    from simbook.config import get_config, save_config

    config = get_config()
    print(config.store.db_path)
    print(config.store.resolved_uri())

    # Modify and save
    config.logging.level = "DEBUG"
    save_config(config)
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from simbook.utils.atomic_write import atomic_write_text

logger = logging.getLogger(__name__)

SIMBOOK_HOME = Path.home() / ".simbook"
CONFIG_PATH = SIMBOOK_HOME / "config.json"

# Current config schema version
CONFIG_VERSION = 1

# SIM phonebook endpoints. Platforms before API level 4 exposed the
# ADN table under the "sim" authority.
ICC_ADN_URI = "content://icc/adn"
LEGACY_SIM_ADN_URI = "content://sim/adn"
ICC_MIN_API_LEVEL = 4


def detect_store_uri(api_level: int) -> str:
    """Return the SIM phonebook endpoint for a platform API level."""
    return ICC_ADN_URI if api_level >= ICC_MIN_API_LEVEL else LEGACY_SIM_ADN_URI


class StoreConfig(BaseModel):
    """SIM record store settings.

    Attributes:
        db_path: SQLite file holding the (simulated) SIM card.
        uri: Explicit endpoint URI. Detected from api_level when None.
        api_level: Platform API level used for endpoint detection.
    """

    db_path: Path = SIMBOOK_HOME / "sim.db"
    uri: str | None = None
    api_level: int = Field(default=30, ge=1)

    def resolved_uri(self) -> str:
        """Return the configured URI, or the one detected for api_level."""
        return self.uri or detect_store_uri(self.api_level)


class CacheConfig(BaseModel):
    """Capacity cache settings.

    Attributes:
        path: JSON file mapping store identity to maximum name length.
    """

    path: Path = SIMBOOK_HOME / "capacity.json"


class LoggingConfig(BaseModel):
    """Logging settings used by the CLI."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class SimbookConfig(BaseModel):
    """simbook configuration schema.

    Attributes:
        config_version: Schema version for migration tracking.
        store: SIM record store settings.
        cache: Capacity cache settings.
        logging: Logging settings.
    """

    config_version: int = CONFIG_VERSION
    store: StoreConfig = Field(default_factory=StoreConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Module-level singleton with thread safety
_config: SimbookConfig | None = None
_config_lock = threading.Lock()


def load_config(config_path: Path | None = None) -> SimbookConfig:
    """Load configuration, falling back to defaults when the file is unusable.

    A missing file is silent. Unreadable, malformed or invalid files are
    logged as warnings.
    """
    path = config_path or CONFIG_PATH
    if not path.exists():
        return SimbookConfig()

    try:
        return SimbookConfig.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return SimbookConfig()


def save_config(config: SimbookConfig, config_path: Path | None = None) -> bool:
    """Write ``config`` owner-only. Returns False if the file could not be written."""
    path = config_path or CONFIG_PATH
    try:
        atomic_write_text(path, config.model_dump_json(indent=2), mode=0o600)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        return False
    return True


def get_config() -> SimbookConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config reloads it."""
    global _config
    with _config_lock:
        _config = None
