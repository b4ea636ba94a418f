"""Async HTTP access to the Gelbooru dapi JSON endpoints.

Client owns the httpx connection pool, the endpoint and the optional
credentials. query_api is the single place where query parameters become a
request URL and a response body becomes a typed envelope; both request
builders go through it.
"""

import logging
from typing import Mapping, Optional, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from gelbooru.auth import AuthDetails
from gelbooru.config import (
    DEFAULT_API_BASE,
    DEFAULT_TIMEOUT,
    Settings,
    get_settings,
)
from gelbooru.errors import DecodeError, TransportError, UrlConstructionError
from gelbooru.models.schemas import PostQuery, TagQuery

logger = logging.getLogger(__name__)

_HEADERS = {"Accept": "application/json"}

Envelope = TypeVar("Envelope", PostQuery, TagQuery)


class Client:
    """Gelbooru API client.

    Should generally be reused for many requests; calls made concurrently
    through one client share its connection pool.
    """

    def __init__(
        self,
        auth: Optional[AuthDetails] = None,
        *,
        api_base: str = DEFAULT_API_BASE,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            auth: Credentials sent with every request, or None for public
                access.
            api_base: Endpoint URL including the fixed dapi selector.
            user_agent: User-Agent header value.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.auth = auth
        self.api_base = api_base
        headers = dict(_HEADERS)
        if user_agent:
            headers["User-Agent"] = user_agent
        self._http = httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        if auth is not None:
            logger.info(f"Gelbooru client initialized for user {auth.user_id}")
        else:
            logger.info("Gelbooru client initialized without credentials")

    @classmethod
    def public(cls, **kwargs) -> "Client":
        """A basic unauthenticated client. May incur rate limiting."""
        return cls(None, **kwargs)

    @classmethod
    def with_auth(cls, auth: AuthDetails, **kwargs) -> "Client":
        """An authenticated client."""
        return cls(auth, **kwargs)

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **kwargs
    ) -> "Client":
        """Build a client from application settings.

        Args:
            settings: Settings to use. Defaults to get_settings().
            **kwargs: Extra keyword arguments for the constructor.

        Raises:
            CredentialParseError: If GELBOORU_CREDENTIALS is set but malformed.
        """
        if settings is None:
            settings = get_settings()
        auth = None
        if settings.GELBOORU_CREDENTIALS:
            auth = AuthDetails.from_query_string(settings.GELBOORU_CREDENTIALS)
        return cls(
            auth,
            api_base=settings.GELBOORU_API_BASE,
            user_agent=settings.GELBOORU_USER_AGENT,
            timeout=settings.GELBOORU_TIMEOUT,
            **kwargs,
        )

    async def fetch(self, url: httpx.URL) -> bytes:
        """GET a URL and return the response body.

        Raises:
            TransportError: On network, TLS or timeout failure, or a non-2xx
                status.
        """
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Gelbooru returned an error (HTTP {e.response.status_code})",
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError("Gelbooru did not respond in time") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach Gelbooru: {e}") from e
        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def build_url(api_base: str, params: Mapping[str, str]) -> httpx.URL:
    """Append query parameters to the API base as ``&name=value`` pairs.

    A base without a query string gets one started with ``?``.

    Raises:
        UrlConstructionError: If the result is not an absolute http(s) URL.
    """
    raw = api_base
    if params:
        if api_base.endswith(("?", "&")):
            separator = ""
        elif "?" in api_base:
            separator = "&"
        else:
            separator = "?"
        raw = f"{api_base}{separator}{urlencode(params)}"
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as e:
        raise UrlConstructionError(raw, str(e)) from e
    if url.scheme not in ("http", "https"):
        raise UrlConstructionError(raw, "scheme must be http or https")
    if not url.host:
        raise UrlConstructionError(raw, "missing host")
    return url


async def query_api(
    client: Client, params: Mapping[str, str], envelope: type[Envelope]
) -> Envelope:
    """Send one query and decode the response into ``envelope``.

    Args:
        client: Client to send the request with.
        params: Query parameters; credentials are added when the client has
            them.
        envelope: PostQuery or TagQuery.

    Returns:
        The decoded envelope.

    Raises:
        UrlConstructionError: If the request URL cannot be built.
        TransportError: If the round trip fails.
        DecodeError: If the body does not match ``envelope``.
    """
    query = dict(params)
    if client.auth is not None:
        query["user_id"] = str(client.auth.user_id)
        query["api_key"] = client.auth.api_key

    url = build_url(client.api_base, query)
    if client.auth is not None:
        logger.debug(f"GET {url.copy_set_param('api_key', '***')}")
    else:
        logger.debug(f"GET {url}")

    body = await client.fetch(url)

    try:
        return envelope.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(
            f"Unexpected {envelope.__name__} response: {e.error_count()} "
            f"validation error(s)"
        ) from e
