"""Helpers for the process locator."""

from .psutil_scan import scan_processes
from .token_extractor import CSRF_TOKEN_PATTERN, extract_token, mask_token

__all__ = ["CSRF_TOKEN_PATTERN", "extract_token", "mask_token", "scan_processes"]
