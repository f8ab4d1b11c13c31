"""Quota retrieval from a resolved language server endpoint."""

import asyncio
import logging
from typing import Any, Dict

import aiohttp
import orjson
from aiohttp import ClientError, ClientTimeout

from .config.settings import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_IDE_NAME
from .exceptions import FetchFailed, MalformedResponse
from .http_utils import HTTP_OK, USER_STATUS_PATH, build_rpc_headers, build_rpc_url
from .models import ResolvedEndpoint
from .quota_models import UserQuota, parse_user_status

logger = logging.getLogger(__name__)


class QuotaFetcher:
    """Issues the GetUserStatus call and decodes its body."""

    def __init__(self, timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS, ide_name: str = DEFAULT_IDE_NAME):
        self.timeout_seconds = timeout_seconds
        self.ide_name = ide_name

    def _request_body(self) -> bytes:
        return orjson.dumps(
            {
                "metadata": {
                    "ideName": self.ide_name,
                    "extensionName": self.ide_name,
                    "locale": "en",
                }
            }
        )

    async def fetch_raw(self, endpoint: ResolvedEndpoint) -> Dict[str, Any]:
        """
        Return the decoded JSON body of GetUserStatus.

        Raises:
            FetchFailed: On connection failure, timeout or a non-200 status
            MalformedResponse: When the body is not a JSON object
        """
        url = build_rpc_url(endpoint.port, USER_STATUS_PATH, host=endpoint.host)
        timeout = ClientTimeout(total=self.timeout_seconds)
        logger.info("Fetching quota from %s", endpoint.address)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    url,
                    data=self._request_body(),
                    headers=build_rpc_headers(endpoint.token),
                    ssl=False,
                ) as response:
                    if response.status != HTTP_OK:
                        detail = await response.text()
                        logger.debug("HTTP %d from GetUserStatus: %s", response.status, detail[:300])
                        raise FetchFailed(status=response.status)
                    raw = await response.read()
        except asyncio.TimeoutError as exc:
            raise FetchFailed(f"Quota request timed out after {self.timeout_seconds}s") from exc
        except (ClientError, OSError) as exc:
            raise FetchFailed(f"Quota request failed: {exc}") from exc

        logger.debug("GetUserStatus response length: %d bytes", len(raw))
        try:
            payload = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise MalformedResponse("Failed to parse response JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedResponse(f"Expected a JSON object, got {type(payload).__name__}")
        return payload

    async def fetch(self, endpoint: ResolvedEndpoint) -> UserQuota:
        """Fetch and parse the quota for ``endpoint``."""
        return parse_user_status(await self.fetch_raw(endpoint))


__all__ = ["QuotaFetcher"]
