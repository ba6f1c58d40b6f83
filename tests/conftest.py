"""Shared fixtures: an in-memory transport driven step by step from tests."""

import pytest

from streamreq._internal.signals import Signal
from streamreq.models import RequestDescriptor


class FakeOperation:
    """Operation whose events are fired explicitly by the test."""

    def __init__(self, method: str, descriptor: RequestDescriptor, body: bytes | None = None):
        self.method = method
        self.descriptor = descriptor
        self.body = body
        self.data_available = Signal("data_available")
        self.finished = Signal("finished")
        self.error_occurred = Signal("error_occurred")
        self.status_code: int | None = None
        self.cancel_calls = 0
        self._pending = bytearray()
        self._active = True

    def is_active(self) -> bool:
        return self._active

    def read_available_bytes(self) -> bytes:
        data = bytes(self._pending)
        self._pending.clear()
        return data

    def cancel(self) -> None:
        self.cancel_calls += 1
        self._active = False

    def push(self, chunk: bytes) -> None:
        self._pending.extend(chunk)
        self.data_available.emit()

    def finish(self, tail: bytes = b"", status_code: int = 200) -> None:
        self._pending.extend(tail)
        self.status_code = status_code
        self._active = False
        self.finished.emit()

    def fail(self, code: int) -> None:
        self._active = False
        self.error_occurred.emit(code)


class FakeTransport:
    def __init__(self):
        self.operations: list[FakeOperation] = []
        self.closed = False

    @property
    def last(self) -> FakeOperation:
        return self.operations[-1]

    def get(self, descriptor: RequestDescriptor) -> FakeOperation:
        operation = FakeOperation("GET", descriptor)
        self.operations.append(operation)
        return operation

    def post(self, descriptor: RequestDescriptor, body: bytes) -> FakeOperation:
        operation = FakeOperation("POST", descriptor, body)
        self.operations.append(operation)
        return operation

    async def aclose(self) -> None:
        self.closed = True


class Recorder:
    """Collects every emission of a signal."""

    def __init__(self, signal: Signal):
        self.calls: list[tuple] = []
        signal.connect(self)

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def values(self) -> list:
        return [args[0] for args in self.calls]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def recorder():
    return Recorder
