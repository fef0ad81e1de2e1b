"""Configuration loader for winposture."""
import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "data" / "default.yaml"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping")
    return data


class Config:
    """Configuration manager for the audit tool."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._config: Dict[str, Any] = _load_yaml(DEFAULT_CONFIG_PATH)
        if path is not None:
            self._config = _merge(self._config, _load_yaml(Path(path)))
            logger.debug("Loaded config from %s", path)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @property
    def enabled_checks(self) -> Optional[List[str]]:
        """Check ids to run, or None for all checks."""
        checks = self.get("audit.checks") or []
        return [str(c).lower() for c in checks] or None

    @property
    def strict(self) -> bool:
        """Whether non-compliant findings fail the run."""
        return bool(self.get("audit.strict", False))

    @property
    def log_level(self) -> str:
        """Logging level name."""
        return str(self.get("logging.level", "WARNING")).upper()

    @property
    def export_format(self) -> str:
        """Default export format (json or csv)."""
        return str(self.get("export.format", "json")).lower()


# Global config instance, created on first use
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration, replacing the global instance."""
    global _config
    _config = Config(path)
    return _config
