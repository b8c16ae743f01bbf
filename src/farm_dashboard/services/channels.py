"""Publish/subscribe channels used to broadcast dashboard updates."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]
Unsubscribe = Callable[[], None]

_logger = logging.getLogger(__name__)


@dataclass
class EventChannel(Generic[T]):
    """Notifies subscribers of each published event without retaining it."""

    _subscribers: list[Subscriber] = field(default_factory=list, init=False)

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """Register a callback; the returned function detaches it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, value: T) -> None:
        """Deliver a value to every subscriber in registration order."""
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:
                _logger.exception("Channel subscriber failed")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


@dataclass
class Channel(EventChannel[T]):
    """Channel that holds a current value and replays it to new subscribers."""

    value: T | None = None

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        unsubscribe = super().subscribe(callback)
        if self.value is not None:
            try:
                callback(self.value)
            except Exception:
                _logger.exception("Channel subscriber failed")
        return unsubscribe

    def publish(self, value: T) -> None:
        self.value = value
        super().publish(value)
