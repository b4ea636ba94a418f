"""Shared test fixtures for the Gelbooru client."""

from typing import Any, Optional

import httpx
import pytest

from gelbooru.auth import AuthDetails
from gelbooru.config import DEFAULT_API_BASE
from gelbooru.services.client import Client


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests received by the mock transport, in order."""
    return []


@pytest.fixture
def auth() -> AuthDetails:
    """Dummy credentials for authenticated requests."""
    return AuthDetails(user_id=1234, api_key="s3cr3tk3y")


@pytest.fixture
async def mock_client(sent_requests: list[httpx.Request]):
    """Factory for Clients backed by an httpx.MockTransport.

    The transport answers every request with the given JSON (or raw
    content) and status code, or raises ``error`` if one is given.
    """
    clients: list[Client] = []

    def _make(
        json_data: Any = None,
        status_code: int = 200,
        *,
        content: Optional[bytes] = None,
        error: Optional[Exception] = None,
        auth: Optional[AuthDetails] = None,
        api_base: str = DEFAULT_API_BASE,
    ) -> Client:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if error is not None:
                raise error
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_data)

        client = Client(
            auth,
            api_base=api_base,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
