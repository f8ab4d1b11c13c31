"""Liveness probing of candidate language server ports."""

import asyncio
import logging

import aiohttp
import orjson
from aiohttp import ClientError, ClientTimeout

from .config.settings import DEFAULT_IDE_NAME, DEFAULT_PROBE_TIMEOUT_SECONDS
from .http_utils import HTTP_OK, UNLEASH_DATA_PATH, build_rpc_headers, build_rpc_url

logger = logging.getLogger(__name__)


class PortProber:
    """Checks whether a port hosts the language server via one authenticated request."""

    def __init__(self, timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS, ide_name: str = DEFAULT_IDE_NAME):
        """
        Initialize port prober.

        Args:
            timeout_seconds: Total time allowed for a single probe
            ide_name: Caller identity reported in the request metadata
        """
        self.timeout_seconds = timeout_seconds
        self.ide_name = ide_name

    async def probe(self, port: int, token: str) -> bool:
        """
        Send GetUnleashData to ``port`` over HTTPS.

        The server certificate is self-signed, so verification is disabled.
        Never raises and never retries.

        Returns:
            True only when the server answers HTTP 200
        """
        body = orjson.dumps({"metadata": {"ideName": self.ide_name}})
        timeout = ClientTimeout(total=self.timeout_seconds)
        try:
            url = build_rpc_url(port, UNLEASH_DATA_PATH)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, data=body, headers=build_rpc_headers(token), ssl=False) as response:
                    logger.debug("Port %d responded with HTTP %d", port, response.status)
                    return response.status == HTTP_OK
        except asyncio.TimeoutError:
            logger.debug("Port %d probe timed out after %ss", port, self.timeout_seconds)
            return False
        except (ClientError, OSError, ValueError) as exc:
            logger.debug("Port %d probe failed: %s", port, exc)
            return False


__all__ = ["PortProber"]
