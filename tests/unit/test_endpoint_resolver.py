"""Tests for the endpoint resolver pipeline."""

from unittest.mock import AsyncMock

import pytest

from quota_probe.endpoint_resolver import EndpointResolver, unique_ports
from quota_probe.exceptions import NoCredentialFound, NoListeningPort, NoRespondingEndpoint, ProcessNotFound
from quota_probe.models import PortCandidate, ProcessCandidate, ResolvedEndpoint, ResolverState
from quota_probe.platform_backends import LinuxBackend
from quota_probe.port_discoverer import PortDiscoverer, PortDiscovery
from quota_probe.process_locator import LocatorResult, ProcessLocator
from tests.helpers.discovery_fakes import PS_OUTPUT, SS_OUTPUT, TOKEN, DelayedProber, FakeCommandRunner


def _locator(result):
    locator = AsyncMock()
    locator.locate.return_value = result
    locator.backend = LinuxBackend()
    return locator


def _discoverer(ports_by_pid):
    async def discover(pid):
        outcome = ports_by_pid.get(pid, [])
        if isinstance(outcome, Exception):
            raise outcome
        return PortDiscovery(pid=pid, ports=list(outcome))

    discoverer = AsyncMock()
    discoverer.discover.side_effect = discover
    return discoverer


class TestUniquePorts:
    def test_first_reporter_token_is_kept(self):
        candidates = [
            PortCandidate(port=5000, token="aa", pid=1),
            PortCandidate(port=5000, token="bb", pid=2),
            PortCandidate(port=6000, token="bb", pid=2),
        ]

        assert unique_ports(candidates) == [
            PortCandidate(port=5000, token="aa", pid=1),
            PortCandidate(port=6000, token="bb", pid=2),
        ]


class TestEndpointResolver:
    @pytest.mark.asyncio
    async def test_no_process_fails_without_further_io(self):
        discoverer = _discoverer({})
        prober = DelayedProber({})
        resolver = EndpointResolver(_locator(LocatorResult(0, ())), discoverer, prober)

        with pytest.raises(ProcessNotFound) as exc_info:
            await resolver.resolve()

        assert exc_info.value.stage == "process search"
        assert resolver.state == ResolverState.FAILED
        discoverer.discover.assert_not_called()
        assert prober.probed == []

    @pytest.mark.asyncio
    async def test_processes_without_token_fail_with_no_credential(self):
        discoverer = _discoverer({})
        resolver = EndpointResolver(_locator(LocatorResult(2, ())), discoverer, DelayedProber({}))

        with pytest.raises(NoCredentialFound):
            await resolver.resolve()

        discoverer.discover.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_ports_fails_with_no_listening_port(self):
        located = LocatorResult(1, (ProcessCandidate(pid=10, token=TOKEN),))
        prober = DelayedProber({})
        resolver = EndpointResolver(_locator(located), _discoverer({10: []}), prober)

        with pytest.raises(NoListeningPort) as exc_info:
            await resolver.resolve()

        assert exc_info.value.hints
        assert "PID 10: no listening ports reported" in exc_info.value.diagnostics
        assert prober.probed == []

    @pytest.mark.asyncio
    async def test_discovery_failure_for_one_candidate_is_isolated(self):
        located = LocatorResult(
            2,
            (ProcessCandidate(pid=10, token="aa"), ProcessCandidate(pid=20, token="bb")),
        )
        discoverer = _discoverer({10: RuntimeError("boom"), 20: [7000]})
        prober = DelayedProber({7000: (0.0, True)})
        resolver = EndpointResolver(_locator(located), discoverer, prober)

        endpoint = await resolver.resolve()

        assert endpoint == ResolvedEndpoint(port=7000, token="bb")

    @pytest.mark.asyncio
    async def test_no_responding_port_fails(self):
        located = LocatorResult(1, (ProcessCandidate(pid=10, token=TOKEN),))
        prober = DelayedProber({5000: (0.0, False), 6000: (0.0, False)})
        resolver = EndpointResolver(_locator(located), _discoverer({10: [5000, 6000]}), prober)

        with pytest.raises(NoRespondingEndpoint) as exc_info:
            await resolver.resolve()

        assert sorted(port for port, _ in prober.probed) == [5000, 6000]
        assert len(exc_info.value.diagnostics) == 2

    @pytest.mark.asyncio
    async def test_only_last_completing_port_responds(self):
        located = LocatorResult(1, (ProcessCandidate(pid=10, token=TOKEN),))
        prober = DelayedProber(
            {
                1000: (0.05, True),
                2000: (0.01, False),
                3000: (0.02, False),
            }
        )
        resolver = EndpointResolver(_locator(located), _discoverer({10: [3000, 2000, 1000]}), prober)

        endpoint = await resolver.resolve()

        assert endpoint == ResolvedEndpoint(port=1000, token=TOKEN)

    @pytest.mark.asyncio
    async def test_first_completed_success_wins_over_lower_port(self):
        located = LocatorResult(1, (ProcessCandidate(pid=10, token=TOKEN),))
        prober = DelayedProber({1000: (0.2, True), 9000: (0.0, True)})
        resolver = EndpointResolver(_locator(located), _discoverer({10: [1000, 9000]}), prober)

        endpoint = await resolver.resolve()

        assert endpoint.port == 9000
        assert resolver.state == ResolverState.RESOLVED

    @pytest.mark.asyncio
    async def test_duplicate_port_is_probed_once_with_first_token(self):
        located = LocatorResult(
            2,
            (ProcessCandidate(pid=10, token="aa"), ProcessCandidate(pid=20, token="bb")),
        )
        prober = DelayedProber({5000: (0.0, True)})
        resolver = EndpointResolver(_locator(located), _discoverer({10: [5000], 20: [5000]}), prober)

        endpoint = await resolver.resolve()

        assert prober.probed == [(5000, "aa")]
        assert endpoint == ResolvedEndpoint(port=5000, token="aa")


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_resolves_from_canned_tool_output(self):
        backend = LinuxBackend()
        runner = FakeCommandRunner({"ps": PS_OUTPUT, "ss": "LISTEN 0 4096 127.0.0.1:42100 0.0.0.0:* users:((\"ls\",pid=4242,fd=9))\n"})
        prober = DelayedProber({42100: (0.0, True)})
        resolver = EndpointResolver(
            ProcessLocator(backend, runner, use_psutil=False),
            PortDiscoverer(backend, runner),
            prober,
        )

        endpoint = await resolver.resolve()

        assert endpoint == ResolvedEndpoint(port=42100, token="abcd-1234-ef00")
        assert prober.probed == [(42100, "abcd-1234-ef00")]

    @pytest.mark.asyncio
    async def test_multiple_ports_from_ss(self):
        backend = LinuxBackend()
        runner = FakeCommandRunner({"ps": PS_OUTPUT, "ss": SS_OUTPUT})
        prober = DelayedProber({42101: (0.0, True)})
        resolver = EndpointResolver(
            ProcessLocator(backend, runner, use_psutil=False),
            PortDiscoverer(backend, runner),
            prober,
        )

        endpoint = await resolver.resolve()

        assert endpoint.port == 42101

    @pytest.mark.asyncio
    async def test_empty_listing_stops_after_process_search(self):
        backend = LinuxBackend()
        runner = FakeCommandRunner({"ps": "    PID ARGS\n      1 /sbin/init\n"})
        prober = DelayedProber({})
        resolver = EndpointResolver(
            ProcessLocator(backend, runner, use_psutil=False),
            PortDiscoverer(backend, runner),
            prober,
        )

        with pytest.raises(ProcessNotFound):
            await resolver.resolve()

        assert runner.executables() == ["ps"]
        assert prober.probed == []
