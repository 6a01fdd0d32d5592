"""HTTP Request Builder - turns a logical request into an httpx.Request.

Authentication is not handled here; the API client attaches it.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from ..core.errors import EncodingError, UrlError


JSON_CONTENT_TYPE = "application/json"


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class APIRequest:
    """Logical description of one backend call."""

    path: str
    method: HTTPMethod = HTTPMethod.GET
    headers: dict[str, str] = field(default_factory=dict)
    query: Optional[dict[str, str]] = None
    body: Any = None


def join_url(base_url: str, path: str) -> str:
    """Join base and path with exactly one separator between them."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _encode_value(value: Any) -> Any:
    """JSON fallback for values the json module does not know."""
    if isinstance(value, datetime):
        # Naive datetimes are local time; everything goes out as UTC.
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_body(body: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Models are dumped by alias with unset optionals omitted; timestamps are
    written as ISO-8601 in UTC. NaN and infinities are rejected.

    Raises:
        EncodingError: If the body is not JSON-serializable
    """
    if isinstance(body, BaseModel):
        body = body.model_dump(by_alias=True, exclude_none=True)
    try:
        return json.dumps(body, default=_encode_value, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodingError(str(e)) from e


def build_url(base_url: str, path: str, query: Optional[dict[str, str]] = None) -> httpx.URL:
    """Resolve ``path`` against ``base_url`` and append a canonical query string.

    Raises:
        UrlError: If the result is not an absolute http(s) address
    """
    try:
        url = httpx.URL(join_url(base_url, path))
        if query:
            url = url.copy_with(params=sorted(query.items()))
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise UrlError() from e

    if url.scheme not in ("http", "https") or not url.host:
        raise UrlError()
    return url


def build_request(base_url: str, request: APIRequest) -> httpx.Request:
    """Build the transport request for ``request``.

    JSON content type is set by default; caller headers win on conflict.

    Raises:
        UrlError: If the address cannot be constructed
        EncodingError: If the body cannot be serialized
    """
    url = build_url(base_url, request.path, request.query)

    headers = httpx.Headers({"Content-Type": JSON_CONTENT_TYPE})
    headers.update(request.headers)

    content = encode_body(request.body) if request.body is not None else None

    return httpx.Request(
        HTTPMethod(request.method).value,
        url,
        headers=headers,
        content=content,
    )
