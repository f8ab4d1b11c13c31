"""Configuration helpers and run settings."""

from ..exceptions import ConfigurationError
from .runtime import env_bool, env_float, env_seconds, env_str
from .settings import ProbeSettings, load_settings

__all__ = [
    "ConfigurationError",
    "ProbeSettings",
    "env_bool",
    "env_float",
    "env_seconds",
    "env_str",
    "load_settings",
]
