"""OS-specific inspection backends, selected by platform identifier."""

from __future__ import annotations

import sys
from typing import Dict, Optional, Type

from .base import PlatformBackend, PosixBackend, SocketQuery
from .darwin import DarwinBackend
from .linux import LinuxBackend
from .windows import WindowsBackend

_BACKENDS: Dict[str, Type[PlatformBackend]] = {
    "darwin": DarwinBackend,
    "win32": WindowsBackend,
    "linux": LinuxBackend,
}

SUPPORTED_PLATFORMS = tuple(_BACKENDS)


def select_backend(platform: Optional[str] = None) -> PlatformBackend:
    """Return the backend for ``platform`` (default: the running interpreter's).

    Unknown platforms fall back to the Linux backend.
    """
    name = platform if platform is not None else sys.platform
    backend_cls = _BACKENDS.get(name, LinuxBackend)
    return backend_cls()


__all__ = [
    "DarwinBackend",
    "LinuxBackend",
    "PlatformBackend",
    "PosixBackend",
    "SUPPORTED_PLATFORMS",
    "SocketQuery",
    "WindowsBackend",
    "select_backend",
]
