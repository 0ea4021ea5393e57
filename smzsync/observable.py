"""A minimal publish/subscribe helper."""

from __future__ import annotations

from typing import Any, Callable

Observer = Callable[[Any], None]


class Observable:
    """Keeps a list of observer callables and calls each one on publish."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        """Remove every subscription of ``observer``; unknown observers are ignored."""
        self._observers = [o for o in self._observers if o != observer]

    def publish(self, obj: Any) -> None:
        for observer in list(self._observers):
            observer(obj)