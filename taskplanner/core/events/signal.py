from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

Slot = Callable[[T], None]


class Signal(Generic[T]):
    """
    Observer primitive for scheduling events.

    Slots are called synchronously in connection order. A slot raising
    ``ReferenceError`` is treated as dead and dropped; any other error reaches
    the emitter.
    """

    def __init__(self) -> None:
        self._slots: list[Slot] = []
        self._lock: RLock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def connect(self, slot: Slot) -> None:
        with self._lock:
            if slot not in self._slots:
                self._slots.append(slot)

    def disconnect(self, slot: Slot) -> None:
        with self._lock:
            if slot in self._slots:
                self._slots.remove(slot)

    @contextmanager
    def connected(self, slot: Slot) -> Iterator[Slot]:
        """Keep ``slot`` subscribed for the duration of a ``with`` block."""
        self.connect(slot)
        try:
            yield slot
        finally:
            self.disconnect(slot)

    def emit(self, payload: T) -> int:
        """Deliver ``payload``; returns how many slots received it."""
        with self._lock:
            slots = list(self._slots)

        delivered = 0
        dead: list[Slot] = []
        for slot in slots:
            try:
                slot(payload)
            except ReferenceError:
                dead.append(slot)
                continue
            delivered += 1

        for slot in dead:
            self.disconnect(slot)
        return delivered
