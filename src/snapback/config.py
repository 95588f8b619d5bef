"""
Configuration management for SnapBack
"""

import logging
import yaml
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for the application"""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".snapback"
        self.config_file = self.config_dir / "config.yaml"

        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.defaults = {
            "snapshot": {
                "interval_seconds": 5.0,
            },
            "restore": {
                "stabilization_delay_seconds": 1.5,
                "position_epsilon": 10,
            },
            "matching": {
                "size_tolerance": 20,
            },
            "logging": {
                "level": "INFO",
            },
        }

        self.config = self.load_config()

    def load_config(self) -> dict[str, Any]:
        """Load configuration from file or create default"""
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    config = yaml.safe_load(f)
                    if not isinstance(config, dict):
                        config = {}
                    # Merge with defaults to ensure all keys exist
                    return self._merge_config(self.defaults, config)
            except (OSError, yaml.YAMLError) as e:
                logger.error("Error loading config %s: %s", self.config_file, e)
                return self._merge_config(self.defaults, {})
        else:
            self.save_config(self.defaults)
            return self._merge_config(self.defaults, {})

    def save_config(self, config: dict[str, Any] | None = None) -> None:
        """Save configuration to file"""
        if config is None:
            config = self.config

        try:
            with open(self.config_file, "w") as f:
                yaml.dump(config, f, default_flow_style=False)
        except OSError as e:
            logger.error("Error saving config %s: %s", self.config_file, e)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation"""
        keys = key.split(".")
        config = self.config

        # Navigate to the parent of the target key
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

        self.save_config()

    def _merge_config(
        self, defaults: dict[str, Any], user_config: dict[str, Any]
    ) -> dict[str, Any]:
        """Recursively merge user config with defaults"""
        result = {
            key: self._merge_config(value, {}) if isinstance(value, dict) else value
            for key, value in defaults.items()
        }

        for key, value in user_config.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    @property
    def snapshot_interval_ms(self) -> int:
        return int(float(self.get("snapshot.interval_seconds", 5.0)) * 1000)

    @property
    def restore_delay_ms(self) -> int:
        return int(float(self.get("restore.stabilization_delay_seconds", 1.5)) * 1000)

    @property
    def position_epsilon(self) -> float:
        return float(self.get("restore.position_epsilon", 10))

    @property
    def size_tolerance(self) -> float:
        return float(self.get("matching.size_tolerance", 20))

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()
