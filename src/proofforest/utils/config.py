import os
import yaml
from copy import deepcopy
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv


# Used when no configuration file can be found
DEFAULTS: Dict[str, Any] = {
    "proof": {
        "initial_path": "p0",
    },
    "logging": {
        "level": "WARNING",
        "format": "%(asctime)s %(name)s %(levelname)s: %(message)s",
    },
    "serialization": {
        "indent": 2,
    },
}


class Config:
    def __init__(self, config_path: Optional[str] = None):
        if config_path is not None and not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        self.config_path = config_path or self._find_config_file()
        self.config = self._load_config()
        self._resolve_environment_variables()

    def _find_config_file(self) -> Optional[str]:
        """Find the default config file."""
        possible_paths = [
            Path.cwd() / "configs" / "default.yaml",
            Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml",
            Path.home() / ".proofforest" / "config.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                return str(path)

        return None

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file, layered over the defaults."""
        config = deepcopy(DEFAULTS)
        if self.config_path is None:
            return config
        with open(self.config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        return _deep_update(config, loaded)

    def _resolve_environment_variables(self):
        """Resolve environment variables in config values."""
        load_dotenv()

        def resolve_value(value):
            if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                var_default = value[2:-1].split(":", 1)
                var_name = var_default[0]
                default_value = var_default[1] if len(var_default) > 1 else ""
                return os.environ.get(var_name, default_value)
            elif isinstance(value, dict):
                return {k: resolve_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [resolve_value(v) for v in value]
            return value

        self.config = resolve_value(self.config)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return self.get(key)

    def update(self, updates: Dict[str, Any]):
        """Update configuration with new values."""
        self.config = _deep_update(self.config, updates)


def _deep_update(d: Dict[str, Any], u: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}) if isinstance(d.get(k), dict) else {}, v)
        else:
            d[k] = v
    return d


# Global config instance
_config = None

def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Drop the global configuration so the next get_config() reloads it."""
    global _config
    _config = None
