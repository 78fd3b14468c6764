import httpx
import pytest

from quickapi.adapters.http_client import build_async_client
from quickapi.core.config import AppSettings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep project/user .env files and QUICKAPI_* variables out of tests."""
    for name in (
        "QUICKAPI_BASE_URL",
        "QUICKAPI_API_KEY",
        "QUICKAPI_API_KEY_NAME",
        "QUICKAPI_API_PLACE",
        "QUICKAPI_HTTP_TIMEOUT_SECONDS",
        "QUICKAPI_USER_AGENT",
        "QUICKAPI_FOLLOW_REDIRECTS",
        "QUICKAPI_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


class Recorder:
    """MockTransport handler that records every request it sees."""

    def __init__(self, status_code=200, json=None, text=None, error=None):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.json = json
        self.text = text
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(f"simulated failure for {request.url}", request=request)
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json)
        return httpx.Response(self.status_code, text=self.text or "")

    def client(self) -> httpx.AsyncClient:
        return build_async_client(AppSettings(_env_file=None), transport=httpx.MockTransport(self))


@pytest.fixture
def recorder():
    return Recorder()
