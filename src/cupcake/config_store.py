"""Shop configuration storage for cupcake."""

import json
import logging
import os
import tempfile
from pathlib import Path

from .data_source import default_config
from .errors import (
    ConfigExistsError,
    ConfigNotFoundError,
    InvalidConfigError,
    InvalidSchemaVersionError,
)
from .models import ShopConfig

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# Path to a shop config JSON file; unset means built-in defaults
CONFIG_ENV_VAR = "CUPCAKE_CONFIG"


class ConfigStore:
    """Manages reading and writing a shop configuration file."""

    def __init__(self, path: Path | str):
        self.config_path = Path(path)

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> ShopConfig:
        """
        Load configuration from disk.

        Raises:
            ConfigNotFoundError: If config doesn't exist.
            InvalidSchemaVersionError: If schema version is unsupported.
            InvalidConfigError: If the file is not a usable shop config.
        """
        if not self.exists():
            raise ConfigNotFoundError(str(self.config_path))

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfigError(f"not valid JSON ({e.msg})", str(self.config_path))

        if not isinstance(data, dict):
            raise InvalidConfigError("expected a JSON object", str(self.config_path))

        version = data.get("schema_version", 0)
        if version != SCHEMA_VERSION:
            raise InvalidSchemaVersionError(version, SCHEMA_VERSION)

        config = ShopConfig.from_dict(data)
        config.validate()
        logger.debug("Loaded shop config from %s", self.config_path)
        return config

    def save(self, config: ShopConfig) -> None:
        """
        Save configuration to disk atomically.

        Uses write-to-temp-then-rename for atomicity.
        """
        config.validate()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = config.to_dict()
        fd, temp_path = tempfile.mkstemp(
            dir=self.config_path.parent, prefix=".shop_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.write("\n")  # trailing newline
            os.replace(temp_path, self.config_path)
        except Exception:
            # Clean up temp file on failure (ignore errors if already removed)
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def init(self, force: bool = False) -> ShopConfig:
        """
        Write the built-in defaults to the config path.

        Raises:
            ConfigExistsError: If config exists and force=False.
        """
        if self.exists() and not force:
            raise ConfigExistsError(str(self.config_path))

        config = default_config()
        self.save(config)
        return config


def load_config(path: Path | str | None = None) -> ShopConfig:
    """
    Resolve the shop config.

    Order: explicit path, then $CUPCAKE_CONFIG, then built-in defaults.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return default_config()
    return ConfigStore(path).load()
