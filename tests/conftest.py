"""Shared fixtures: a Postmark config, a message factory and a fake transport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
import pytest_asyncio

from sendout.domain.entities import Body, EmailMessage
from sendout.infrastructure.email.providers.postmark import PostmarkClient
from sendout.infrastructure.settings import ServiceConfig

SERVER_TOKEN = "server-token-7f3a9b2c"
ACCOUNT_TOKEN = "account-token-d41e8f06"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real POSTMARK_* variables and any local .env out of the tests."""
    for name in ("POSTMARK_BASE_URL", "POSTMARK_SERVER_TOKEN", "POSTMARK_ACCOUNT_TOKEN", "POSTMARK_FROM_EMAIL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(
        base_url="https://postmark.example.com",
        server_token=SERVER_TOKEN,
        from_email="outbox@example.com",
    )


@pytest.fixture
def make_message() -> Callable[..., EmailMessage]:
    def _make(**overrides) -> EmailMessage:
        fields = dict(
            from_="Wangari Maathai <wangari@example.org>",
            to=["kwame@example.org"],
            subject="Green Belt Movement Monthly Update",
            body=Body.text("We planted 10,000 trees across Kenya this month."),
        )
        fields.update(overrides)
        return EmailMessage(**fields)

    return _make


class RecordingTransport:
    """``httpx.MockTransport`` handler that records requests and replays one outcome."""

    def __init__(self, response: httpx.Response | None = None, error: type[httpx.TransportError] | None = None):
        self.response = response
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated failure", request=request)
        return self.response


@pytest_asyncio.fixture
async def make_client(service_config):
    """Build a ``PostmarkClient`` over a ``RecordingTransport``.

    Returns ``(client, transport)``. The HTTP clients belong to the test and
    are closed on teardown.
    """
    http_clients: list[httpx.AsyncClient] = []

    def _make(response: httpx.Response | None = None, error=None, config: ServiceConfig | None = None):
        transport = RecordingTransport(response=response, error=error)
        http = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        http_clients.append(http)
        return PostmarkClient(config or service_config, http), transport

    yield _make

    for http in http_clients:
        await http.aclose()
