"""Parse listening ports out of socket-state tool output."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

# Loopback or wildcard address immediately followed by a numeric port.
LOCAL_ADDRESS_PORT = re.compile(r"(?<![\w.\]])(?:127\.0\.0\.1|localhost|0\.0\.0\.0|\[::1\]|\[::\]|\*):(\d+)\b")

LISTEN_MARKER = "LISTEN"
MAX_PORT = 65535


def is_listening_line(line: str) -> bool:
    return LISTEN_MARKER in line.upper()


def parse_port(line: str) -> Optional[int]:
    """Return the first local listening port on ``line``, if any."""
    if not is_listening_line(line):
        return None
    match = LOCAL_ADDRESS_PORT.search(line)
    if match is None:
        return None
    port = int(match.group(1))
    if not 1 <= port <= MAX_PORT:
        return None
    return port


def parse_listening_ports(lines: Iterable[str]) -> List[int]:
    """Return unique listening ports in first-seen order."""
    ports: List[int] = []
    for line in lines:
        port = parse_port(line)
        if port is not None and port not in ports:
            ports.append(port)
    return ports


__all__ = ["LOCAL_ADDRESS_PORT", "is_listening_line", "parse_listening_ports", "parse_port"]
