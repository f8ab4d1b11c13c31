"""Data types passed between the discovery stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

LOCAL_HOST = "127.0.0.1"


class ResolverState(Enum):
    """Progress of an endpoint resolution run."""

    IDLE = "idle"
    SEARCHING_PROCESSES = "searching processes"
    SEARCHING_PORTS = "searching ports"
    PROBING_PORTS = "probing ports"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class ProcessEntry:
    """One raw process listing row: pid plus full command line."""

    pid: int
    cmdline: str


@dataclass(frozen=True)
class ProcessCandidate:
    """A language server process carrying an extractable CSRF token."""

    pid: int
    token: str


@dataclass(frozen=True)
class PortCandidate:
    """A listening port reported for a candidate process."""

    port: int
    token: str
    pid: int


@dataclass(frozen=True)
class ResolvedEndpoint:
    """The confirmed endpoint of the language server."""

    port: int
    token: str
    host: str = LOCAL_HOST

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


__all__ = [
    "LOCAL_HOST",
    "PortCandidate",
    "ProcessCandidate",
    "ProcessEntry",
    "ResolvedEndpoint",
    "ResolverState",
]
