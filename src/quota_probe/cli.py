"""
cli.py – Command-line interface for quota-probe.

Usage:
    python -m quota_probe [OPTIONS]

Finds the local language server, confirms its endpoint and prints the
account's model quotas.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .command_runner import build_command_runner
from .config import ProbeSettings, load_settings
from .endpoint_resolver import EndpointResolver
from .exceptions import ConfigurationError, DiscoveryError, QuotaProbeError
from .logging_config import setup_logging
from .platform_backends import SUPPORTED_PLATFORMS, PlatformBackend, select_backend
from .port_discoverer import PortDiscoverer
from .port_prober import PortProber
from .process_locator import ProcessLocator
from .quota_fetcher import QuotaFetcher
from .summary_renderer import render_json, render_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2


def build_resolver(backend: PlatformBackend, settings: ProbeSettings) -> EndpointResolver:
    """Wire the discovery pipeline for one platform."""
    runner = build_command_runner(settings.command_timeout_seconds)
    return EndpointResolver(
        locator=ProcessLocator(backend, runner),
        discoverer=PortDiscoverer(backend, runner),
        prober=PortProber(timeout_seconds=settings.probe_timeout_seconds, ide_name=settings.ide_name),
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quota-probe",
        description="Locate the local language server and print its model quotas.",
    )
    p.add_argument("--json", action="store_true", help="Print the raw GetUserStatus response as JSON")
    p.add_argument("--endpoint-only", action="store_true", help="Print host:port of the resolved endpoint and stop")
    p.add_argument("--verbose", action="store_true", help="Debug logging and per-stage diagnostics on failure")
    p.add_argument("--platform", choices=SUPPORTED_PLATFORMS, help="Override the detected platform")
    p.add_argument("--probe-timeout", type=float, metavar="SECONDS", help="Timeout for each port probe")
    p.add_argument("--fetch-timeout", type=float, metavar="SECONDS", help="Timeout for the quota request")
    return p


def render_discovery_error(error: DiscoveryError, *, verbose: bool) -> str:
    lines = [f"❌ {error.stage} failed: {error}"]
    lines.extend(f"   - {hint}" for hint in error.hints)
    if verbose and error.diagnostics:
        lines.append("   Diagnostics:")
        lines.extend(f"     {entry}" for entry in error.diagnostics)
    return "\n".join(lines)


async def run(args: argparse.Namespace, settings: ProbeSettings) -> int:
    backend = select_backend(args.platform)
    resolver = build_resolver(backend, settings)
    try:
        endpoint = await resolver.resolve()
    except DiscoveryError as exc:
        print(render_discovery_error(exc, verbose=args.verbose), file=sys.stderr)
        return EXIT_FAILURE

    if args.endpoint_only:
        print(endpoint.address)
        return EXIT_OK

    fetcher = QuotaFetcher(timeout_seconds=settings.fetch_timeout_seconds, ide_name=settings.ide_name)
    try:
        if args.json:
            print(render_json(await fetcher.fetch_raw(endpoint)))
        else:
            print(render_summary(await fetcher.fetch(endpoint)))
    except QuotaProbeError as exc:
        print(f"❌ quota fetch failed: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        setup_logging(verbose=args.verbose)
        settings = load_settings().with_overrides(
            probe_timeout_seconds=args.probe_timeout,
            fetch_timeout_seconds=args.fetch_timeout,
        )
    except ConfigurationError as exc:
        print(f"❌ configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIGURATION

    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
