"""
Runtime settings for a discovery and fetch run.

Every value has a built-in default and may be overridden through the
environment. Command-line flags override both.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..exceptions import ConfigurationError
from .runtime import env_seconds, env_str

DEFAULT_PROBE_TIMEOUT_SECONDS = 1.0
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_COMMAND_TIMEOUT_SECONDS = 5.0
DEFAULT_IDE_NAME = "antigravity"

PROBE_TIMEOUT_ENV = "QUOTA_PROBE_PROBE_TIMEOUT_SECONDS"
FETCH_TIMEOUT_ENV = "QUOTA_PROBE_FETCH_TIMEOUT_SECONDS"
COMMAND_TIMEOUT_ENV = "QUOTA_PROBE_COMMAND_TIMEOUT_SECONDS"
IDE_NAME_ENV = "QUOTA_PROBE_IDE_NAME"


@dataclass(frozen=True)
class ProbeSettings:
    """
    Tunables for one run.

    Attributes:
        probe_timeout_seconds: Upper bound for a single liveness probe
        fetch_timeout_seconds: Upper bound for the quota request
        command_timeout_seconds: Upper bound for each external inspection command
        ide_name: Caller identity reported in request metadata
    """

    probe_timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    command_timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS
    ide_name: str = DEFAULT_IDE_NAME

    def with_overrides(
        self,
        *,
        probe_timeout_seconds: Optional[float] = None,
        fetch_timeout_seconds: Optional[float] = None,
    ) -> "ProbeSettings":
        """Return a copy with any non-None override applied.

        Raises:
            ConfigurationError: When an override is not a positive number of seconds.
        """
        changes = {}
        for name, value in (
            ("probe_timeout_seconds", probe_timeout_seconds),
            ("fetch_timeout_seconds", fetch_timeout_seconds),
        ):
            if value is None:
                continue
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive (got {value})")
            changes[name] = value
        return replace(self, **changes)


def load_settings() -> ProbeSettings:
    """Build settings from defaults plus environment overrides."""
    return ProbeSettings(
        probe_timeout_seconds=env_seconds(PROBE_TIMEOUT_ENV, or_value=DEFAULT_PROBE_TIMEOUT_SECONDS),
        fetch_timeout_seconds=env_seconds(FETCH_TIMEOUT_ENV, or_value=DEFAULT_FETCH_TIMEOUT_SECONDS),
        command_timeout_seconds=env_seconds(COMMAND_TIMEOUT_ENV, or_value=DEFAULT_COMMAND_TIMEOUT_SECONDS),
        ide_name=env_str(IDE_NAME_ENV, or_value=DEFAULT_IDE_NAME),
    )


__all__ = ["ProbeSettings", "load_settings"]
