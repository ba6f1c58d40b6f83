"""Synchronous observer lists used for change notifications."""

from collections.abc import Callable
from typing import Any

Slot = Callable[..., Any]


class Signal:
    """A named list of callbacks invoked in connection order.

    Emission is synchronous: every connected slot runs before `emit` returns.
    Exceptions raised by a slot propagate to the emitter.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._slots: list[Slot] = []

    def connect(self, slot: Slot) -> Slot:
        """Connect a callback. Returns it so `connect` can be used as a decorator."""
        if slot not in self._slots:
            self._slots.append(slot)
        return slot

    def disconnect(self, slot: Slot | None = None) -> None:
        """Disconnect one callback, or every callback when `slot` is None."""
        if slot is None:
            self._slots.clear()
        elif slot in self._slots:
            self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        # Copy so slots may disconnect themselves while being called.
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"<Signal {self.name} slots={len(self._slots)}>"
