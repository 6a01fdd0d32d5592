"""API Client - the single choke point for every backend call.

Builds the request, attaches the bearer token read at call time, sends it on
a shared httpx.AsyncClient and decodes the envelope. Every failure surfaces
as an APIError.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from ..core.envelope import decode_response, is_success_status
from ..core.errors import TransportError
from .request_builder import APIRequest, build_request


logger = logging.getLogger(__name__)

T = TypeVar("T")

TokenProvider = Callable[[], Optional[str]]


def _no_token() -> Optional[str]:
    return None


def _log_response_error(request: httpx.Request, response: httpx.Response) -> None:
    """Log an error response without request headers (they carry the token)."""
    body = (response.text or "")[:500]
    logger.warning(
        "%s %s -> %s body=%s",
        request.method,
        request.url.path,
        response.status_code,
        body,
    )


class APIClient:
    """Async client for the FitPro backend.

    One ``send`` is one independent request: no retries, no coalescing and
    no timeout beyond the transport default. Cancelling the calling task
    cancels the request in flight.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider = _no_token,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Backend address, e.g. http://localhost:4000
            token_provider: Called on every send to get the current bearer token
            transport: Optional httpx transport (tests plug an ASGI app in here)
        """
        self.base_url = base_url
        self._token_provider = token_provider
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the shared httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def prepare(self, request: APIRequest) -> httpx.Request:
        """Build the transport request and attach the current bearer token.

        Raises:
            UrlError: If the address cannot be constructed
        EncodingError: If the body cannot be serialized
        """
        http_request = build_request(self.base_url, request)
        token = self._token_provider()
        if token:
            http_request.headers["Authorization"] = f"Bearer {token}"
        return http_request

    async def send(self, request: APIRequest, shape: type[T] | Any) -> T:
        """Send ``request`` and decode the payload as ``shape``.

        Args:
            request: Logical request
            shape: Expected payload type

        Returns:
            The decoded payload (None for a success envelope without data)

        Raises:
            APIError: On any failure (transport, address, server or decoding)
        """
        http_request = self.prepare(request)
        logger.debug("%s %s", http_request.method, http_request.url)

        try:
            response = await self.client.send(http_request)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", http_request.method, http_request.url.path, e)
            raise TransportError(str(e)) from e

        if not is_success_status(response.status_code):
            _log_response_error(http_request, response)

        return decode_response(response.status_code, response.content, shape)
