"""httpx-backed transport that streams each response on an asyncio task."""

import asyncio

import httpx

from streamreq._internal.http import create_async_client
from streamreq._internal.signals import Signal
from streamreq._internal.transport.errors import (
    NetworkError,
    describe_error,
    error_for_exception,
    error_for_status,
)
from streamreq.exceptions import StreamreqTransportError
from streamreq.models import RequestDescriptor


class HttpxOperation:
    """One streamed request running on the current event loop.

    The task is scheduled on creation but does not run until the caller
    yields to the loop, so signals connected right after construction
    see every event.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        method: str,
        descriptor: RequestDescriptor,
        body: bytes | None = None,
        *,
        debug: bool = False,
    ) -> None:
        self.data_available = Signal("data_available")
        self.finished = Signal("finished")
        self.error_occurred = Signal("error_occurred")
        self.status_code: int | None = None

        self._client = client
        self._method = method
        self._descriptor = descriptor
        self._body = body
        self._debug = debug
        self._pending = bytearray()
        self._active = True
        self._cancelled = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    def is_active(self) -> bool:
        return self._active

    def read_available_bytes(self) -> bytes:
        data = bytes(self._pending)
        self._pending.clear()
        return data

    def cancel(self) -> None:
        """Cancel the request. Safe to call more than once or after completion."""
        if self._cancelled:
            return
        self._cancelled = True
        self._active = False
        self._task.cancel()

    async def wait(self) -> None:
        """Wait until the operation has finished, failed or been cancelled."""
        await asyncio.wait({self._task})

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[streamreq:transport] {message}", file=sys.stderr)

    async def _run(self) -> None:
        try:
            await self._stream()
        except asyncio.CancelledError:
            self._log_debug(f"{self._method} {self._descriptor.url} cancelled")
            raise
        except StreamreqTransportError as e:
            self._fail(NetworkError(e.code))
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            self._log_debug(f"{self._method} {self._descriptor.url} failed: {e!r}")
            self._fail(error_for_exception(e))
        except Exception as e:
            # Raised by a data_available observer; the request still has to end.
            self._log_debug(f"{self._method} {self._descriptor.url} observer error: {e!r}")
            self._fail(NetworkError.UNKNOWN_NETWORK)
        else:
            self._active = False
            if not self._cancelled:
                self.finished.emit()
        finally:
            self._active = False

    async def _stream(self) -> None:
        async with self._client.stream(
            self._method,
            self._descriptor.url,
            headers=self._descriptor.headers,
            content=self._body,
            timeout=httpx.Timeout(self._descriptor.timeout_ms / 1000),
        ) as response:
            self.status_code = response.status_code
            self._log_debug(f"{self._method} {self._descriptor.url} -> {response.status_code}")
            async for chunk in response.aiter_bytes():
                if not chunk:
                    continue
                self._pending.extend(chunk)
                if self._cancelled:
                    return
                self.data_available.emit()

            code = error_for_status(response.status_code)
            if code != NetworkError.NO_ERROR:
                raise StreamreqTransportError(describe_error(code), code=code)

    def _fail(self, code: NetworkError) -> None:
        self._active = False
        if not self._cancelled:
            self.error_occurred.emit(code)


class HttpxTransport:
    """Transport issuing requests through one shared httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient | None = None, *, debug: bool = False) -> None:
        self._client = client or create_async_client()
        self._debug = debug

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    def get(self, descriptor: RequestDescriptor) -> HttpxOperation:
        """Start a streamed GET. Must be called while an event loop is running."""
        return HttpxOperation(self._client, "GET", descriptor, debug=self._debug)

    def post(self, descriptor: RequestDescriptor, body: bytes) -> HttpxOperation:
        """Start a streamed POST. Must be called while an event loop is running."""
        return HttpxOperation(self._client, "POST", descriptor, body, debug=self._debug)

    async def aclose(self) -> None:
        await self._client.aclose()
