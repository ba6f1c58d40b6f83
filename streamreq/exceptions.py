"""Public exceptions for streamreq."""


class StreamreqError(Exception):
    """Base exception for all streamreq errors."""


class StreamreqConfigError(StreamreqError):
    """Configuration error (malformed env vars, invalid config)."""


class StreamreqTransportError(StreamreqError):
    """Transport-level failure carrying a network error code."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
