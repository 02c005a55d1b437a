"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - async_client: HTTPX client for API testing
    - relay_config: RelayConfig with a test key
    - upstream: Recording stub of the Anthropic Messages API
    - stub_relay: Patches the relay singleton with one that talks to the stub
"""

import json
from collections.abc import AsyncGenerator, Callable, Iterator
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import chat_portal.llm.relay_service as relay_module
from chat_portal.api import app
from chat_portal.llm.config import RelayConfig
from chat_portal.llm.relay_service import RelayService


@dataclass
class StubUpstream:
    """In-memory stand-in for the Messages API.

    Attributes:
        reply_text: Text returned in the reply's single text block.
        status_code: Status returned for every call.
        requests: Every request received, in order.
    """

    reply_text: str = "Hello from the model"
    status_code: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"type": "stub"}})
        return httpx.Response(
            200,
            json={
                "id": "msg_test",
                "type": "message",
                "role": "assistant",
                "content": [{"type": "text", "text": self.reply_text}],
            },
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture(autouse=True)
def reset_relay_singleton() -> Iterator[None]:
    """Start every test without a cached relay service."""
    relay_module._relay_service = None
    yield
    relay_module._relay_service = None


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return a config that never touches the environment's key."""
    return RelayConfig(api_key="sk-ant-test", model_name="claude-test-model")


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def make_relay(
    relay_config: RelayConfig, upstream: StubUpstream
) -> Callable[[], RelayService]:
    def factory() -> RelayService:
        return RelayService(config=relay_config, transport=upstream.transport)

    return factory


@pytest.fixture
def stub_relay(make_relay: Callable[[], RelayService]) -> Iterator[RelayService]:
    """Route the API's relay service to the stub upstream."""
    service = make_relay()
    with patch("chat_portal.api.chat.get_relay_service", return_value=service):
        yield service


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
