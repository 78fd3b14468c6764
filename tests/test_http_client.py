import httpx
import pytest

from quickapi.adapters.http_client import build_async_client
from quickapi.core.config import AppSettings


class TestBuildAsyncClient:
    @pytest.mark.anyio
    async def test_defaults_and_transport(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        settings = AppSettings(_env_file=None, user_agent="quickapi-tests/1.0", http_timeout_seconds=3)
        async with build_async_client(settings, transport=httpx.MockTransport(handler)) as client:
            await client.get("https://api.example.com/ping")
            assert client.timeout.read == 3
            assert client.follow_redirects is True

        [request] = seen
        assert request.headers["User-Agent"] == "quickapi-tests/1.0"
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.anyio
    async def test_extra_headers_override_defaults(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        async with build_async_client(
            AppSettings(_env_file=None, follow_redirects=False),
            extra_headers={"Accept": "text/plain", "X-Trace": "1"},
            transport=httpx.MockTransport(handler),
        ) as client:
            await client.get("https://api.example.com/ping")
            assert client.follow_redirects is False

        assert seen[0].headers["Accept"] == "text/plain"
        assert seen[0].headers["X-Trace"] == "1"
