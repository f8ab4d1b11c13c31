"""Process enumeration through psutil."""

from __future__ import annotations

import logging
from typing import List, Sequence

import psutil

from ..models import ProcessEntry

logger = logging.getLogger(__name__)


def _matches(target: str, name: str, cmdline: Sequence[str]) -> bool:
    if target in name:
        return True
    return any(target in str(arg) for arg in cmdline)


def scan_processes(target: str) -> List[ProcessEntry]:
    """
    Return entries for every process whose name or command line mentions ``target``.

    Processes that vanish or deny access mid-scan are skipped. A failure of the
    enumeration itself yields an empty list.
    """
    entries: List[ProcessEntry] = []
    try:
        for proc in psutil.process_iter(["pid", "name", "cmdline"]):
            try:
                pid = proc.info["pid"]
                name = proc.info.get("name") or ""
                cmdline_value = proc.info.get("cmdline") or []
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue

            cmdline = [str(arg) for arg in cmdline_value] if isinstance(cmdline_value, list) else []
            if not _matches(target, str(name), cmdline):
                continue
            entries.append(ProcessEntry(pid=int(pid), cmdline=" ".join(cmdline)))
    except (psutil.Error, OSError) as exc:
        logger.debug("psutil process enumeration failed: %s", exc)
        return []

    logger.debug("psutil found %d %s process(es)", len(entries), target)
    return entries


__all__ = ["scan_processes"]
