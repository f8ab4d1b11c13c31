"""Exception classes for quota discovery and retrieval.

All custom exceptions inherit from ``QuotaProbeError`` so callers can handle
every terminal failure of a run in one place.

Exception classes support two patterns:
1. No-argument raise: raise ProcessNotFound()
2. Contextual attributes: err = NoListeningPort(pids=[12, 34]); raise err
"""

from typing import Any, List, Optional


class QuotaProbeError(Exception):
    """Base exception for all quota probe errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Quota probe error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ConfigurationError(QuotaProbeError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Configuration is invalid or missing"
        super().__init__(message, **kwargs)


class CommandError(QuotaProbeError):
    """An external inspection command could not be run or exited with an error."""

    def __init__(self, message: str = "", *, command: str = "", **kwargs: Any) -> None:
        if not message:
            message = f"Command failed: {command}" if command else "External command failed"
        super().__init__(message, command=command, **kwargs)


class DiscoveryError(QuotaProbeError):
    """Endpoint discovery failed."""

    stage: str = "discovery"
    hints: tuple = ()

    def __init__(self, message: str = "", *, diagnostics: Optional[List[str]] = None, **kwargs: Any) -> None:
        if not message:
            message = self.default_message()
        super().__init__(message, **kwargs)
        self.diagnostics = list(diagnostics) if diagnostics else []

    @classmethod
    def default_message(cls) -> str:
        return (cls.__doc__ or "Endpoint discovery failed").strip()


class ProcessNotFound(DiscoveryError):
    """No running language server process was found."""

    stage = "process search"
    hints = ("Make sure the IDE is running and signed in.",)


class NoCredentialFound(DiscoveryError):
    """Language server processes were found but none carried a CSRF token."""

    stage = "credential extraction"
    hints = ("The language server command line format may have changed.",)


class NoListeningPort(DiscoveryError):
    """No listening port was found for any candidate process."""

    stage = "port discovery"
    hints = (
        "lsof/netstat/ss may lack permission to inspect the process (try sudo).",
        "The process may listen in a way the socket tools do not report.",
        "Remote development sessions may not expose the port locally.",
    )


class NoRespondingEndpoint(DiscoveryError):
    """No candidate port answered the liveness probe."""

    stage = "port probing"


class FetchFailed(QuotaProbeError):
    """The quota request failed."""

    def __init__(self, message: str = "", *, status: Optional[int] = None, **kwargs: Any) -> None:
        if not message:
            message = f"API request failed: HTTP {status}" if status is not None else "API request failed"
        super().__init__(message, status=status, **kwargs)


class MalformedResponse(QuotaProbeError):
    """The quota response could not be parsed."""


__all__ = [
    "CommandError",
    "ConfigurationError",
    "DiscoveryError",
    "FetchFailed",
    "MalformedResponse",
    "NoCredentialFound",
    "NoListeningPort",
    "NoRespondingEndpoint",
    "ProcessNotFound",
    "QuotaProbeError",
]
