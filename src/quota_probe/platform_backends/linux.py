"""Linux process and socket inspection."""

from __future__ import annotations

from typing import List

from .base import PosixBackend, SocketQuery


class LinuxBackend(PosixBackend):
    platform = "linux"
    target_executable = "language_server_linux"

    def socket_queries(self, pid: int) -> List[SocketQuery]:
        ss_marker = f"pid={pid},"
        netstat_marker = f" {pid}/"
        return [
            SocketQuery(name="ss", argv=("ss", "-tlnp"), line_filter=lambda line: ss_marker in line),
            SocketQuery(name="netstat", argv=("netstat", "-tulpn"), line_filter=lambda line: netstat_marker in line),
            self._lsof_query(pid),
        ]
