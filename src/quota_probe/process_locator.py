"""
Process Locator

Finds running language server processes and recovers the CSRF token each one
was launched with. Processes are enumerated through psutil first; when that
finds nothing the platform's listing command is consulted instead.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .command_runner import CommandRunner
from .exceptions import CommandError
from .models import ProcessCandidate, ProcessEntry
from .platform_backends import PlatformBackend
from .process_locator_helpers import extract_token, mask_token, scan_processes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocatorResult:
    """Outcome of a process search.

    ``matched_processes`` counts distinct pids whose name matched the target,
    with or without a token, so callers can tell "not running" apart from
    "running without a credential".
    """

    matched_processes: int
    candidates: Tuple[ProcessCandidate, ...]


def build_candidates(entries: Sequence[ProcessEntry]) -> LocatorResult:
    """Extract tokens from listing entries, keeping one candidate per pid."""
    seen_pids = set()
    by_pid: Dict[int, ProcessCandidate] = {}
    for entry in entries:
        seen_pids.add(entry.pid)
        token = extract_token(entry.cmdline)
        if token is None:
            logger.debug("PID %s: no CSRF token in command line, skipping", entry.pid)
            continue
        by_pid[entry.pid] = ProcessCandidate(pid=entry.pid, token=token)
    return LocatorResult(matched_processes=len(seen_pids), candidates=tuple(by_pid.values()))


class ProcessLocator:
    """Locate language server processes for one platform."""

    def __init__(self, backend: PlatformBackend, runner: CommandRunner, *, use_psutil: bool = True):
        self.backend = backend
        self._runner = runner
        self._use_psutil = use_psutil

    async def locate(self) -> LocatorResult:
        logger.info("Searching for process %s", self.backend.target_executable)
        entries = await self._list_processes()
        result = build_candidates(entries)
        for candidate in result.candidates:
            logger.debug("Candidate PID %s with token %s", candidate.pid, mask_token(candidate.token))
        logger.info(
            "Found %d matching process(es), %d with a CSRF token",
            result.matched_processes,
            len(result.candidates),
        )
        return result

    async def _list_processes(self) -> List[ProcessEntry]:
        if self._use_psutil:
            entries = await asyncio.to_thread(scan_processes, self.backend.target_executable)
            if entries:
                return entries

        argv = self.backend.process_listing_command()
        try:
            output = await self._runner(argv)
        except CommandError as exc:
            logger.debug("Process listing via %s failed: %s", argv[0], exc)
            return []
        return self.backend.parse_process_listing(output)


__all__ = ["LocatorResult", "ProcessLocator", "build_candidates"]
