"""Transport protocol: the controller depends on this, not on httpx."""

from typing import Protocol

from streamreq._internal.signals import Signal
from streamreq.models import RequestDescriptor


class Operation(Protocol):
    """Handle to one in-flight request.

    Signals:
        data_available() - new bytes can be read with read_available_bytes()
        finished() - the response was fully received
        error_occurred(code) - the request failed with a NetworkError code
    """

    data_available: Signal
    finished: Signal
    error_occurred: Signal
    status_code: int | None

    def is_active(self) -> bool: ...

    def read_available_bytes(self) -> bytes: ...

    def cancel(self) -> None: ...


class Transport(Protocol):
    def get(self, descriptor: RequestDescriptor) -> Operation: ...

    def post(self, descriptor: RequestDescriptor, body: bytes) -> Operation: ...

    async def aclose(self) -> None: ...
