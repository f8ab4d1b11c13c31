from __future__ import annotations

"""Run external inspection commands without blocking the event loop."""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from .exceptions import CommandError

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str]], Awaitable[str]]

DEFAULT_COMMAND_TIMEOUT_SECONDS = 5.0


async def run_command(argv: Sequence[str], *, timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS) -> str:
    """
    Run ``argv`` and return its decoded stdout.

    Raises:
        CommandError: When the binary is missing or not executable, exits non-zero,
                      or does not finish within ``timeout_seconds``.
    """
    command = " ".join(argv)
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise CommandError(f"Unable to start {argv[0]}: {exc}", command=command) from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        await _terminate(process)
        raise CommandError(f"{argv[0]} timed out after {timeout_seconds}s", command=command) from exc

    if process.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()
        raise CommandError(
            f"{argv[0]} exited with status {process.returncode}: {detail[:200]}",
            command=command,
            returncode=process.returncode,
        )

    logger.debug("Command %r returned %d bytes", command, len(stdout))
    return stdout.decode("utf-8", errors="replace")


async def _terminate(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        return
    await process.wait()


def build_command_runner(timeout_seconds: float) -> CommandRunner:
    """Return a runner bound to the given per-command timeout."""

    async def _runner(argv: Sequence[str]) -> str:
        return await run_command(argv, timeout_seconds=timeout_seconds)

    return _runner


__all__ = ["CommandRunner", "build_command_runner", "run_command"]
