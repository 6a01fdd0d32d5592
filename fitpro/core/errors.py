"""Error Model - the only exception type raised across the client boundary.

Every failure carries an integer ``status`` (the HTTP status, or
``CLIENT_ERROR_STATUS`` when no HTTP response exists) and a non-empty
human-readable ``message``.
"""

CLIENT_ERROR_STATUS = -1

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class APIError(Exception):
    """Base error for every API failure."""

    def __init__(self, status: int, message: str | None) -> None:
        self.status = status
        self.message = message or UNKNOWN_ERROR_MESSAGE
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (type(self), self.status, self.message) == (type(other), other.status, other.message)

    def __hash__(self) -> int:
        return hash((type(self), self.status, self.message))


class TransportError(APIError):
    """The request could not be sent or no response arrived."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(CLIENT_ERROR_STATUS, message or "Network request failed")


class UrlError(APIError):
    """The request could not be turned into a valid address."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(CLIENT_ERROR_STATUS, message or "Invalid URL")


class ServerError(APIError):
    """The server answered with an error status or ``success: false``."""


class DecodingError(APIError):
    """The body matched neither the envelope nor the raw payload shape."""

    def __init__(self, status: int, message: str | None = None) -> None:
        super().__init__(status, message or "Decoding failed")


class EncodingError(APIError):
    """The request body could not be serialized to JSON."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(CLIENT_ERROR_STATUS, message or "Encoding failed")
