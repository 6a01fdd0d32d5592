"""Envelope Protocol Decoder - Pure functions for decoding backend responses.

Most endpoints wrap their payload as ``{success, data, message}``; a few
(health checks, the last-exercise lookup) answer with the raw payload or
``null``. Decoding tries the envelope first and the raw shape second, and
each attempt is a separate function returning an explicit match.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, StrictBool, TypeAdapter, ValidationError

from .errors import DecodingError, ServerError, UNKNOWN_ERROR_MESSAGE


T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Standard response wrapper."""

    success: StrictBool
    data: Optional[T] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class EnvelopeMatch:
    """The body is an envelope whose ``data`` fits the payload shape."""

    envelope: Envelope


@dataclass(frozen=True)
class RawMatch:
    """The body is the payload itself, without an envelope."""

    payload: Any


@dataclass(frozen=True)
class NoMatch:
    """The body fits neither shape."""


DecodeMatch = Union[EnvelopeMatch, RawMatch, NoMatch]


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def match_envelope(content: bytes, shape: Any) -> EnvelopeMatch | NoMatch:
    """Try to read ``content`` as ``Envelope[shape]``."""
    try:
        return EnvelopeMatch(Envelope[shape].model_validate_json(content))
    except ValidationError:
        return NoMatch()


def match_raw(content: bytes, shape: Any) -> RawMatch | NoMatch:
    """Try to read ``content`` directly as ``shape``."""
    try:
        return RawMatch(_adapter(shape).validate_json(content))
    except ValidationError:
        return NoMatch()


def match_body(content: bytes, shape: Any) -> DecodeMatch:
    """Match a success body: envelope first, raw payload second.

    Args:
        content: Raw response bytes
        shape: Expected payload type (a model, ``list[Model]``, ``Optional[Model]``...)

    Returns:
        The first match found, or NoMatch
    """
    match = match_envelope(content, shape)
    if isinstance(match, EnvelopeMatch):
        return match
    return match_raw(content, shape)


def error_message(content: bytes) -> str | None:
    """Extract a non-empty ``message`` from an error envelope, if any."""
    match = match_envelope(content, Any)
    if isinstance(match, EnvelopeMatch) and match.envelope.message:
        return match.envelope.message
    return None


def decode_response(status: int, content: bytes, shape: Any) -> Any:
    """Decode a response into its payload or raise the matching APIError.

    Args:
        status: HTTP status code
        content: Raw response bytes
        shape: Expected payload type

    Returns:
        The payload, or None when the envelope reports success without data

    Raises:
        ServerError: Error status, or ``success: false`` without data
        DecodingError: Success status but the body fits no known shape
    """
    if not is_success_status(status):
        raise ServerError(status, error_message(content) or f"HTTP {status}")

    match = match_body(content, shape)

    if isinstance(match, EnvelopeMatch):
        envelope = match.envelope
        if envelope.data is not None:
            return envelope.data
        if envelope.success:
            return None
        raise ServerError(status, envelope.message or UNKNOWN_ERROR_MESSAGE)

    if isinstance(match, RawMatch):
        return match.payload

    raise DecodingError(status)
