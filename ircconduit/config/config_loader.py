# ircconduit/config/config_loader.py
"""
YAML client configuration.

Source of truth:
- config/client.yml (or the file named by IRCCONDUIT_CONFIG)

A missing file is not an error: every field has a default.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "IRCCONDUIT_CONFIG"
DEFAULT_CONFIG_PATH = "config/client.yml"


class ConfigError(ValueError):
    """The configuration file exists but cannot be used."""


@dataclass
class ClientConfig:
    host: str = "localhost"
    port: int = 6667
    tls: bool = False
    flood_delay: float = 1.0  # seconds between outbound lines
    read_size: int = 4096
    nick: str = "ircconduit"
    user: str = "ircconduit"
    realname: str = "ircconduit"
    channels: list[str] = field(default_factory=list)
    log_level: str = "INFO"


# Accepted YAML types per field; ints are fine where floats are expected
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "host": (str,),
    "port": (int,),
    "tls": (bool,),
    "flood_delay": (int, float),
    "read_size": (int,),
    "nick": (str,),
    "user": (str,),
    "realname": (str,),
    "channels": (list,),
    "log_level": (str,),
}


class ConfigLoader:
    def __init__(self, config_path: str | None = None):
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
        self.config_path = Path(config_path)

    # ------------------------------------------------------------------

    def load_raw(self) -> dict[str, Any]:
        if not self.config_path.exists():
            return {}

        with open(self.config_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"invalid YAML in {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path}: top level must be a mapping")

        section = data.get("client", data)
        if not isinstance(section, dict):
            raise ConfigError(f"{self.config_path}: 'client' must be a mapping")
        return section

    def load(self) -> ClientConfig:
        raw = self.load_raw()
        known = {f.name for f in fields(ClientConfig)}

        values = {}
        for key, value in raw.items():
            if key not in known:
                continue
            self._check_type(key, value)
            values[key] = value

        config = ClientConfig(**values)

        if not 0 < config.port < 65536:
            raise ConfigError(f"port out of range: {config.port}")
        if config.flood_delay < 0:
            raise ConfigError(f"flood_delay must be >= 0, got {config.flood_delay}")
        if config.read_size <= 0:
            raise ConfigError(f"read_size must be positive, got {config.read_size}")

        return config

    # ------------------------------------------------------------------

    @staticmethod
    def _check_type(key: str, value: Any) -> None:
        expected = _FIELD_TYPES[key]

        # bool is an int subclass; only accept it where a bool is wanted
        if isinstance(value, bool) and bool not in expected:
            raise ConfigError(f"{key}: expected {expected[0].__name__}, got bool")
        if not isinstance(value, expected):
            raise ConfigError(
                f"{key}: expected {expected[0].__name__}, got {type(value).__name__}"
            )
        if key == "channels" and not all(isinstance(c, str) for c in value):
            raise ConfigError("channels: every entry must be a string")
