"""Single-request controller with an observable lifecycle."""

import os
from functools import partial
from types import TracebackType
from typing import Any

from pydantic import ValidationError

from streamreq._internal.http import create_async_client
from streamreq._internal.signals import Signal
from streamreq._internal.transport import (
    HttpxTransport,
    Operation,
    Transport,
    describe_error,
)
from streamreq.exceptions import StreamreqConfigError
from streamreq.models import ControllerConfig, RequestDescriptor, RequestState

CONTENT_TYPE_HEADER = "Content-Type"

# Edges reachable from request/transport events. abort() and reset_status()
# may force NONE from any state and bypass this table.
_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    # An operation left running by reset_status() may still report.
    RequestState.NONE: frozenset(
        {
            RequestState.PENDING,
            RequestState.PROCESSING,
            RequestState.COMPLETED,
            RequestState.ERROR,
        }
    ),
    RequestState.PENDING: frozenset(
        {RequestState.PROCESSING, RequestState.COMPLETED, RequestState.ERROR}
    ),
    RequestState.PROCESSING: frozenset(
        {RequestState.PROCESSING, RequestState.COMPLETED, RequestState.ERROR}
    ),
    RequestState.COMPLETED: frozenset(),
    RequestState.ERROR: frozenset(),
}


class RequestController:
    """Issues one GET or POST at a time and streams the response into a buffer.

    The lifecycle is exposed through `state` and the derived `busy` flag, each
    with a change signal. Results are delivered through signals:

        finished(body: bytes)
        error_occurred(message: str)
        aborted()

    All commands must be called from the event loop the transport delivers
    its events on. Nothing here blocks; completion is observed through the
    signals only.

    Events from an operation that is no longer the active one (because it
    was aborted) are discarded.
    """

    def __init__(
        self,
        *,
        transport: Transport | None = None,
        config: ControllerConfig | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            transport: Transport used for every request. Defaults to an
                HttpxTransport owning its own AsyncClient.
            config: Request defaults (timeout, content type, debug).
        """
        self._config = config or ControllerConfig()
        self._transport: Transport = transport or HttpxTransport(
            create_async_client(timeout_ms=self._config.timeout_ms),
            debug=self._config.debug,
        )
        self._state = RequestState.NONE
        self._busy = False
        self._buffer = bytearray()
        self._active_operation: Operation | None = None
        self._error_message: str | None = None
        self._status_code: int | None = None

        self.state_changed = Signal("state_changed")
        self.busy_changed = Signal("busy_changed")
        self.finished = Signal("finished")
        self.error_occurred = Signal("error_occurred")
        self.aborted = Signal("aborted")

    @classmethod
    def from_env(cls, *, transport: Transport | None = None) -> "RequestController":
        """Create a controller configured from environment variables.

        Optional environment variables:
            STREAMREQ_TIMEOUT_MS: Per-request timeout in milliseconds.
            STREAMREQ_CONTENT_TYPE: Content-Type sent with every request.
            STREAMREQ_DEBUG: Set to "1" to enable debug logging.

        Raises:
            StreamreqConfigError: If a variable holds an invalid value.
        """
        values: dict[str, Any] = {"debug": os.environ.get("STREAMREQ_DEBUG", "") == "1"}
        if "STREAMREQ_TIMEOUT_MS" in os.environ:
            values["timeout_ms"] = os.environ["STREAMREQ_TIMEOUT_MS"]
        if "STREAMREQ_CONTENT_TYPE" in os.environ:
            values["content_type"] = os.environ["STREAMREQ_CONTENT_TYPE"]

        try:
            config = ControllerConfig(**values)
        except ValidationError as e:
            raise StreamreqConfigError(f"Invalid streamreq configuration: {e}") from e
        return cls(transport=transport, config=config)

    # =========================================================================
    # Observable properties
    # =========================================================================

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def busy(self) -> bool:
        """True while a request is Pending or Processing."""
        return self._busy

    @property
    def buffer(self) -> bytes:
        """Bytes received for the current (or last) request."""
        return bytes(self._buffer)

    @property
    def active_operation(self) -> Operation | None:
        return self._active_operation

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def status_code(self) -> int | None:
        """HTTP status of the last response, if the server answered."""
        return self._status_code

    @property
    def config(self) -> ControllerConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    def is_active(self) -> bool:
        """Whether a request is outstanding. Safe before the first request."""
        if self._busy:
            return True
        return self._active_operation is not None and self._active_operation.is_active()

    # =========================================================================
    # Commands
    # =========================================================================

    def start_get(self, url: str) -> bool:
        """Start a GET request.

        Returns:
            False without touching any state if a request is already active,
            True once the request has been handed to the transport.
        """
        if self.is_active():
            self._log_debug(f"Rejected GET {url}: request already active")
            return False

        descriptor = self._build_descriptor(url)
        operation = self._transport.get(descriptor)
        self._reset_for_request()
        self._attach(operation)
        self._log_debug(f"GET {url} started")
        return True

    def start_post(
        self,
        url: str,
        body: bytes,
        extra_headers: dict[str, Any] | None = None,
    ) -> bool:
        """Start a POST request.

        The configured content type is always sent; a Content-Type entry in
        `extra_headers` is ignored.

        Args:
            url: Absolute request URL.
            body: Raw request payload.
            extra_headers: Additional headers, values are sent as strings.

        Returns:
            False without touching any state if a request is already active,
            True once the request has been handed to the transport.
        """
        if self.is_active():
            self._log_debug(f"Rejected POST {url}: request already active")
            return False

        descriptor = self._build_descriptor(url, extra_headers)
        operation = self._transport.post(descriptor, body)
        self._reset_for_request()
        self._attach(operation)
        self._log_debug(f"POST {url} started ({len(body)} bytes)")
        return True

    def abort(self) -> None:
        """Cancel the active request, if any, and return to NONE."""
        operation = self._active_operation
        if operation is None:
            self._set_state(RequestState.NONE)
            return

        self._active_operation = None
        self._detach(operation)
        operation.cancel()
        self._log_debug("Request aborted")
        self.aborted.emit()
        self._set_state(RequestState.NONE)

    def reset_status(self) -> None:
        """Force the state back to NONE without cancelling anything."""
        self._set_state(RequestState.NONE)

    async def aclose(self) -> None:
        """Abort the active request, if any, and close the transport.

        A COMPLETED or ERROR state is left as is.
        """
        if self._active_operation is not None:
            self.abort()
        await self._transport.aclose()

    async def __aenter__(self) -> "RequestController":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # =========================================================================
    # Transport events
    # =========================================================================

    def _on_data_available(self, operation: Operation) -> None:
        if operation is not self._active_operation:
            return
        self._buffer.extend(operation.read_available_bytes())
        if not self._state.is_terminal:
            self._transition(RequestState.PROCESSING)

    def _on_finished(self, operation: Operation) -> None:
        if operation is not self._active_operation:
            return
        self._buffer.extend(operation.read_available_bytes())
        self._release(operation)
        if self._transition(RequestState.COMPLETED):
            self._log_debug(f"Request finished ({len(self._buffer)} bytes)")
            self.finished.emit(bytes(self._buffer))

    def _on_error_occurred(self, operation: Operation, code: int) -> None:
        if operation is not self._active_operation:
            return
        self._release(operation)
        if self._transition(RequestState.ERROR):
            self._error_message = describe_error(code)
            self._log_debug(self._error_message)
            self.error_occurred.emit(self._error_message)

    # =========================================================================
    # Internals
    # =========================================================================

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._config.debug:
            import sys

            print(f"[streamreq] {message}", file=sys.stderr)

    def _build_descriptor(
        self, url: str, extra_headers: dict[str, Any] | None = None
    ) -> RequestDescriptor:
        headers = {CONTENT_TYPE_HEADER: self._config.content_type}
        for name, value in (extra_headers or {}).items():
            if name.lower() == CONTENT_TYPE_HEADER.lower():
                self._log_debug(f"Ignoring caller {name} header")
                continue
            if isinstance(value, bytes):
                value = value.decode("latin-1")
            headers[name] = str(value)

        return RequestDescriptor(url=url, headers=headers, timeout_ms=self._config.timeout_ms)

    def _reset_for_request(self) -> None:
        self._buffer = bytearray()
        self._error_message = None
        self._status_code = None
        self._set_state(RequestState.NONE)

    def _attach(self, operation: Operation) -> None:
        self._active_operation = operation
        self._transition(RequestState.PENDING)
        operation.data_available.connect(partial(self._on_data_available, operation))
        operation.finished.connect(partial(self._on_finished, operation))
        operation.error_occurred.connect(partial(self._on_error_occurred, operation))

    def _detach(self, operation: Operation) -> None:
        operation.data_available.disconnect()
        operation.finished.disconnect()
        operation.error_occurred.disconnect()

    def _release(self, operation: Operation) -> None:
        self._status_code = operation.status_code
        self._detach(operation)
        self._active_operation = None

    def _transition(self, new_state: RequestState) -> bool:
        """Apply an event-driven transition if the table allows it."""
        if new_state not in _TRANSITIONS[self._state]:
            self._log_debug(f"Refused transition {self._state.name} -> {new_state.name}")
            return False
        self._set_state(new_state)
        return True

    def _set_state(self, new_state: RequestState) -> None:
        if self._state == new_state:
            return
        was_busy = self._busy
        # busy is updated before any listener runs so both always agree.
        self._state = new_state
        self._busy = new_state.is_busy
        self.state_changed.emit(new_state)
        if self._busy != was_busy:
            self.busy_changed.emit(self._busy)
