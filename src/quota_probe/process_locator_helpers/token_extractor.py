"""Extract the CSRF token from a language server command line."""

from __future__ import annotations

import re
from typing import Optional

CSRF_TOKEN_PATTERN = re.compile(r"--csrf_token[=\s]+([a-f0-9\-]+)", re.IGNORECASE)


def extract_token(cmdline: str) -> Optional[str]:
    """Return the token following ``--csrf_token``, or None when absent."""
    if not cmdline:
        return None
    match = CSRF_TOKEN_PATTERN.search(cmdline)
    if match is None:
        return None
    return match.group(1)


def mask_token(token: str) -> str:
    """Short form of a token that is safe to log."""
    if len(token) <= 8:
        return "****"
    return f"{token[:4]}…{token[-4:]}"


__all__ = ["CSRF_TOKEN_PATTERN", "extract_token", "mask_token"]
