"""
Port Discoverer

Asks the platform's socket-state tools which TCP ports a process listens on.
Tools are tried in the backend's priority order; the first one whose output
mentions the process is the one parsed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .command_runner import CommandRunner
from .exceptions import CommandError
from .platform_backends import PlatformBackend
from .port_discoverer_helpers import parse_listening_ports

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortDiscovery:
    """Ports found for one pid, plus which tool supplied them and which tools failed."""

    pid: int
    ports: List[int]
    tool: Optional[str] = None
    failures: List[str] = field(default_factory=list)


class PortDiscoverer:
    """Discover listening ports for a pid using the backend's socket queries."""

    def __init__(self, backend: PlatformBackend, runner: CommandRunner):
        self.backend = backend
        self._runner = runner

    async def discover(self, pid: int) -> PortDiscovery:
        failures: List[str] = []
        for query in self.backend.socket_queries(pid):
            try:
                output = await self._runner(query.argv)
            except CommandError as exc:
                logger.debug("%s failed for PID %s: %s", query.name, pid, exc)
                failures.append(f"{query.name}: {exc}")
                continue

            lines = query.relevant_lines(output)
            if not lines:
                logger.debug("%s reported nothing for PID %s", query.name, pid)
                continue

            ports = parse_listening_ports(lines)
            logger.debug("%s reported ports %s for PID %s", query.name, ports, pid)
            return PortDiscovery(pid=pid, ports=ports, tool=query.name, failures=failures)

        return PortDiscovery(pid=pid, ports=[], failures=failures)


__all__ = ["PortDiscoverer", "PortDiscovery"]
