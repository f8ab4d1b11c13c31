"""
Endpoint Resolver

Drives the discovery pipeline:

    searching processes -> searching ports -> probing ports -> resolved | failed

Port discovery fans out across all candidate processes and probing fans out
across all unique ports. The first probe to complete successfully wins; the
stragglers are cancelled. Nothing is retried: every empty stage ends the run
with a stage-specific DiscoveryError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, NoReturn, Optional, Sequence

from .exceptions import (
    DiscoveryError,
    NoCredentialFound,
    NoListeningPort,
    NoRespondingEndpoint,
    ProcessNotFound,
)
from .models import PortCandidate, ProcessCandidate, ResolvedEndpoint, ResolverState
from .port_discoverer import PortDiscoverer, PortDiscovery
from .port_prober import PortProber
from .process_locator import ProcessLocator

logger = logging.getLogger(__name__)


def unique_ports(candidates: Iterable[PortCandidate]) -> List[PortCandidate]:
    """Keep one candidate per port; the first reporter's token is retained."""
    by_port: Dict[int, PortCandidate] = {}
    for candidate in candidates:
        by_port.setdefault(candidate.port, candidate)
    return list(by_port.values())


class EndpointResolver:
    """Resolve the language server's ``(port, token)`` for one run."""

    def __init__(self, locator: ProcessLocator, discoverer: PortDiscoverer, prober: PortProber):
        self._locator = locator
        self._discoverer = discoverer
        self._prober = prober
        self.state = ResolverState.IDLE

    async def resolve(self) -> ResolvedEndpoint:
        """
        Run the full pipeline once.

        Raises:
            ProcessNotFound: No process matched the target executable.
            NoCredentialFound: Processes matched but none carried a token.
            NoListeningPort: No candidate reported a listening port.
            NoRespondingEndpoint: No port answered the liveness probe.
        """
        self._transition(ResolverState.SEARCHING_PROCESSES)
        located = await self._locator.locate()
        if not located.candidates:
            if located.matched_processes:
                self._fail(NoCredentialFound(diagnostics=[f"{located.matched_processes} process(es) matched without a token"]))
            self._fail(ProcessNotFound(f"No running {self._locator.backend.target_executable} process was found"))

        self._transition(ResolverState.SEARCHING_PORTS)
        port_candidates, diagnostics = await self._discover_ports(located.candidates)
        if not port_candidates:
            self._fail(NoListeningPort(diagnostics=diagnostics))

        ports = unique_ports(port_candidates)
        logger.info("Probing %d candidate port(s): %s", len(ports), ", ".join(str(c.port) for c in ports))

        self._transition(ResolverState.PROBING_PORTS)
        endpoint = await self._first_responding(ports)
        if endpoint is None:
            self._fail(
                NoRespondingEndpoint(diagnostics=[f"port {c.port} (PID {c.pid}) did not respond" for c in ports])
            )

        self._transition(ResolverState.RESOLVED)
        logger.info("Resolved language server endpoint %s", endpoint.address)
        return endpoint

    async def _discover_ports(self, candidates: Sequence[ProcessCandidate]) -> tuple[List[PortCandidate], List[str]]:
        results = await asyncio.gather(
            *(self._discoverer.discover(candidate.pid) for candidate in candidates),
            return_exceptions=True,
        )

        port_candidates: List[PortCandidate] = []
        diagnostics: List[str] = []
        for candidate, result in zip(candidates, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.debug("Port discovery for PID %s failed: %s", candidate.pid, result)
                diagnostics.append(f"PID {candidate.pid}: {result}")
                continue
            diagnostics.extend(f"PID {candidate.pid}: {failure}" for failure in result.failures)
            if not result.ports:
                diagnostics.append(f"PID {candidate.pid}: no listening ports reported")
            port_candidates.extend(self._to_port_candidates(candidate, result))
        return port_candidates, diagnostics

    @staticmethod
    def _to_port_candidates(candidate: ProcessCandidate, discovery: PortDiscovery) -> List[PortCandidate]:
        return [PortCandidate(port=port, token=candidate.token, pid=candidate.pid) for port in discovery.ports]

    async def _first_responding(self, candidates: Sequence[PortCandidate]) -> Optional[ResolvedEndpoint]:
        tasks = [asyncio.create_task(self._probe(candidate)) for candidate in candidates]
        try:
            for next_done in asyncio.as_completed(tasks):
                winner = await next_done
                if winner is not None:
                    return ResolvedEndpoint(port=winner.port, token=winner.token)
            return None
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def _probe(self, candidate: PortCandidate) -> Optional[PortCandidate]:
        if await self._prober.probe(candidate.port, candidate.token):
            return candidate
        return None

    def _transition(self, state: ResolverState) -> None:
        logger.debug("Resolver state: %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, error: DiscoveryError) -> NoReturn:
        self._transition(ResolverState.FAILED)
        raise error


__all__ = ["EndpointResolver", "unique_ports"]
