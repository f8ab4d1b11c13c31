"""macOS process and socket inspection."""

from __future__ import annotations

from typing import List

from .base import PosixBackend, SocketQuery


class DarwinBackend(PosixBackend):
    platform = "darwin"
    target_executable = "language_server_macos"

    def socket_queries(self, pid: int) -> List[SocketQuery]:
        # netstat on macOS does not report owning pids
        return [self._lsof_query(pid)]
