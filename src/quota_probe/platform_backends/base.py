"""Capability interface for OS-specific process and socket inspection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..models import ProcessEntry


@dataclass(frozen=True)
class SocketQuery:
    """One socket-state command plus the filter selecting the lines for a pid."""

    name: str
    argv: Tuple[str, ...]
    line_filter: Callable[[str], bool]

    def relevant_lines(self, output: str) -> List[str]:
        return [line for line in output.splitlines() if line.strip() and self.line_filter(line)]


class PlatformBackend(ABC):
    """
    Platform-specific knowledge needed by the discovery pipeline.

    Implementations only describe *which* commands to run and how to read
    their output; running them is left to the caller so tests can supply
    canned text.
    """

    platform: str = ""
    target_executable: str = ""

    @abstractmethod
    def process_listing_command(self) -> Tuple[str, ...]:
        """Return the argv listing processes with their full command lines."""

    @abstractmethod
    def parse_process_listing(self, output: str) -> List[ProcessEntry]:
        """Return entries for target processes found in the listing output."""

    @abstractmethod
    def socket_queries(self, pid: int) -> List[SocketQuery]:
        """Return socket-state queries for ``pid`` in priority order."""

    def matches_target(self, text: str) -> bool:
        return self.target_executable in text


class PosixBackend(PlatformBackend):
    """Shared ``ps`` handling for Linux and macOS."""

    def process_listing_command(self) -> Tuple[str, ...]:
        return ("ps", "-ww", "-eo", "pid,args")

    def parse_process_listing(self, output: str) -> List[ProcessEntry]:
        entries: List[ProcessEntry] = []
        for line in output.splitlines():
            if not self.matches_target(line):
                continue
            parts = line.strip().split(None, 1)
            if len(parts) != 2 or not parts[0].isdigit():
                continue
            entries.append(ProcessEntry(pid=int(parts[0]), cmdline=parts[1]))
        return entries

    @staticmethod
    def _lsof_query(pid: int) -> SocketQuery:
        return SocketQuery(
            name="lsof",
            argv=("lsof", "-Pan", "-p", str(pid), "-i"),
            line_filter=lambda line: True,
        )


__all__ = ["PlatformBackend", "PosixBackend", "SocketQuery"]
