"""Pydantic models describing requests and controller configuration."""

from enum import IntEnum

from pydantic import BaseModel, Field, field_validator

from streamreq._internal.http import DEFAULT_CONTENT_TYPE, DEFAULT_TIMEOUT_MS


class RequestState(IntEnum):
    """Lifecycle phase of a RequestController."""

    ERROR = -1
    NONE = 0
    PENDING = 1
    PROCESSING = 2
    COMPLETED = 3

    @property
    def is_busy(self) -> bool:
        return self in (RequestState.PENDING, RequestState.PROCESSING)

    @property
    def is_terminal(self) -> bool:
        return self in (RequestState.COMPLETED, RequestState.ERROR)


class RequestDescriptor(BaseModel):
    """What the transport needs to issue one request.

    Fields:
        url: Absolute request URL
        headers: Header name to value, sent as-is
        timeout_ms: Transport inactivity timeout in milliseconds
    """

    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("url")
    @classmethod
    def url_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("url must not be empty")
        return v


class ControllerConfig(BaseModel):
    """Per-controller request defaults."""

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    content_type: str = Field(default=DEFAULT_CONTENT_TYPE, min_length=1)
    debug: bool = False
