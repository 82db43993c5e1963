"""Minimal signal/slot and deferred-call machinery."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable


class Signal:
    """A list of callables invoked, in connection order, on emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove one connection of ``slot``; ValueError if it is not connected."""
        try:
            self._slots.remove(slot)
        except ValueError:
            raise ValueError("slot is not connected to this signal") from None

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)


class EventQueue:
    """Callbacks posted for later, run in order by process_events."""

    def __init__(self) -> None:
        self._pending: deque[Callable[[], Any]] = deque()

    def post(self, callback: Callable[[], Any]) -> None:
        self._pending.append(callback)

    def process_events(self) -> int:
        """Run pending callbacks, including ones they post; return how many ran."""
        count = 0
        while self._pending:
            callback = self._pending.popleft()
            callback()
            count += 1
        return count

    def __len__(self) -> int:
        return len(self._pending)