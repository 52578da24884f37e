"""Synchronous observer channel used for model and placement notifications."""

from __future__ import annotations

from typing import Any, Callable, List


Listener = Callable[..., Any]


class Signal:
    """Ordered list of listeners invoked synchronously on ``emit``.

    Listeners run in subscription order within the emitting call, so a
    consumer replaying events in order sees every state transition.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, *args: Any) -> None:
        # Copy so a listener may unsubscribe itself mid-dispatch.
        for listener in list(self._listeners):
            listener(*args)

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, listeners={len(self._listeners)})"
