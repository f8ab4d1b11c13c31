import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import orjson
import pytest
from aiohttp import ClientError

from quota_probe.port_prober import PortProber


def _session_with_response(status=None, error=None):
    mock_post_cm = MagicMock()
    if error is not None:
        mock_post_cm.__aenter__.side_effect = error
    else:
        mock_response = AsyncMock()
        mock_response.status = status
        mock_post_cm.__aenter__.return_value = mock_response
    mock_post_cm.__aexit__.return_value = None

    mock_session = MagicMock()
    mock_session.post.return_value = mock_post_cm
    mock_session.__aenter__.return_value = mock_session
    mock_session.__aexit__.return_value = None
    return mock_session


class TestPortProber:
    @pytest.mark.asyncio
    async def test_probe_success(self):
        prober = PortProber()
        mock_session = _session_with_response(status=200)

        with patch("aiohttp.ClientSession", return_value=mock_session):
            assert await prober.probe(42100, "abcd-1234") is True

        args, kwargs = mock_session.post.call_args
        assert args[0] == "https://127.0.0.1:42100/exa.language_server_pb.LanguageServerService/GetUnleashData"
        assert kwargs["headers"]["X-Codeium-Csrf-Token"] == "abcd-1234"
        assert kwargs["headers"]["Connect-Protocol-Version"] == "1"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["ssl"] is False
        assert orjson.loads(kwargs["data"]) == {"metadata": {"ideName": "antigravity"}}

    @pytest.mark.asyncio
    async def test_probe_non_200_is_not_alive(self):
        prober = PortProber()

        with patch("aiohttp.ClientSession", return_value=_session_with_response(status=401)):
            assert await prober.probe(42100, "abcd") is False

    @pytest.mark.asyncio
    async def test_probe_timeout_is_not_alive(self):
        prober = PortProber(timeout_seconds=0.5)

        with patch("aiohttp.ClientSession", return_value=_session_with_response(error=asyncio.TimeoutError())):
            assert await prober.probe(42100, "abcd") is False

    @pytest.mark.asyncio
    async def test_probe_connection_error_is_not_alive(self):
        prober = PortProber()

        with patch("aiohttp.ClientSession", return_value=_session_with_response(error=ClientError())):
            assert await prober.probe(42100, "abcd") is False

    @pytest.mark.asyncio
    async def test_probe_uses_configured_timeout(self):
        prober = PortProber(timeout_seconds=0.25)

        with patch("aiohttp.ClientSession", return_value=_session_with_response(status=200)) as session_cls:
            await prober.probe(42100, "abcd")

        assert session_cls.call_args.kwargs["timeout"].total == 0.25
