"""Client configuration."""

from .config_loader import ClientConfig, ConfigError, ConfigLoader

__all__ = ["ClientConfig", "ConfigError", "ConfigLoader"]
