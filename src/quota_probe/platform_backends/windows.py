"""Windows process and socket inspection via wmic and netstat."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..models import ProcessEntry
from .base import PlatformBackend, SocketQuery

_COMMAND_LINE_PREFIX = "CommandLine="
_PROCESS_ID_PREFIX = "ProcessId="


class WindowsBackend(PlatformBackend):
    platform = "win32"
    target_executable = "language_server_windows_x64.exe"

    def process_listing_command(self) -> Tuple[str, ...]:
        return (
            "wmic",
            "process",
            "where",
            f"name='{self.target_executable}'",
            "get",
            "commandline,processid",
            "/format:list",
        )

    def parse_process_listing(self, output: str) -> List[ProcessEntry]:
        """Read ``/format:list`` records: one ``Key=Value`` pair per line."""
        entries: List[ProcessEntry] = []
        cmdline: Optional[str] = None
        pid: Optional[int] = None
        for raw_line in output.splitlines():
            line = raw_line.strip()
            if line.startswith(_COMMAND_LINE_PREFIX):
                cmdline = line[len(_COMMAND_LINE_PREFIX) :]
            elif line.startswith(_PROCESS_ID_PREFIX):
                value = line[len(_PROCESS_ID_PREFIX) :]
                pid = int(value) if value.isdigit() else None
            else:
                continue

            if cmdline is not None and pid is not None:
                if cmdline:
                    entries.append(ProcessEntry(pid=pid, cmdline=cmdline))
                cmdline = None
                pid = None
        return entries

    def socket_queries(self, pid: int) -> List[SocketQuery]:
        pid_text = str(pid)

        def _owned_listener(line: str) -> bool:
            columns = line.split()
            return "LISTENING" in line and bool(columns) and columns[-1] == pid_text

        return [SocketQuery(name="netstat", argv=("netstat", "-ano"), line_filter=_owned_listener)]
