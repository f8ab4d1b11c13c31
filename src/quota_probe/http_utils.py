from __future__ import annotations

"""HTTP helpers shared by the port prober and the quota fetcher."""

from typing import Dict

from .models import LOCAL_HOST

SERVICE_PATH = "/exa.language_server_pb.LanguageServerService"
UNLEASH_DATA_PATH = f"{SERVICE_PATH}/GetUnleashData"
USER_STATUS_PATH = f"{SERVICE_PATH}/GetUserStatus"

CSRF_HEADER = "X-Codeium-Csrf-Token"
PROTOCOL_VERSION_HEADER = "Connect-Protocol-Version"
PROTOCOL_VERSION = "1"

HTTP_OK = 200


def build_rpc_url(port: int, path: str, *, host: str = LOCAL_HOST) -> str:
    """Return the HTTPS URL of an RPC method on the local language server."""
    if not 1 <= port <= 65535:
        raise ValueError(f"Port out of range: {port}")
    return f"https://{host}:{port}{path}"


def build_rpc_headers(token: str) -> Dict[str, str]:
    """Headers authenticating a JSON request with the CSRF token."""
    return {
        "Content-Type": "application/json",
        CSRF_HEADER: token,
        PROTOCOL_VERSION_HEADER: PROTOCOL_VERSION,
    }


__all__ = [
    "CSRF_HEADER",
    "HTTP_OK",
    "UNLEASH_DATA_PATH",
    "USER_STATUS_PATH",
    "build_rpc_headers",
    "build_rpc_url",
]
