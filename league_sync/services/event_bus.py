"""Publish/subscribe channel for cross-feature events."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from league_sync.config import settings
from league_sync.schemas.events import EVENT_PAYLOADS

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]
Unsubscribe = Callable[[], None]


@dataclass(eq=False)
class _Listener:
    callback: Callback
    once: bool = False


@dataclass(frozen=True)
class EmittedEvent:
    """One entry of the bus history."""

    topic: str
    payload: Any
    timestamp: float = field(default_factory=time.time)


class EventBus:
    """In-process publish/subscribe bus.

    Payloads emitted as plain dicts on a known topic are validated into the
    topic's payload model before delivery. A dict that fails validation is
    logged and dropped.
    """

    def __init__(self, history_size: int | None = None, debug: bool | None = None) -> None:
        size = settings.event_history_size if history_size is None else history_size
        self.debug = settings.event_bus_debug if debug is None else debug
        self._listeners: dict[str, list[_Listener]] = {}
        self._history: deque[EmittedEvent] = deque(maxlen=max(0, size))

    def _subscribe(self, topic: str, callback: Callback, once: bool) -> Unsubscribe:
        listener = _Listener(callback=callback, once=once)
        self._listeners.setdefault(topic, []).append(listener)
        if self.debug:
            logger.debug("Subscribed%s to %r", " once" if once else "", topic)

        def unsubscribe() -> None:
            listeners = self._listeners.get(topic)
            if listeners and listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def on(self, topic: str, callback: Callback) -> Unsubscribe:
        """Subscribe to ``topic`` and return an unsubscribe function."""
        return self._subscribe(topic, callback, once=False)

    def once(self, topic: str, callback: Callback) -> Unsubscribe:
        """Subscribe for the next emission of ``topic`` only."""
        return self._subscribe(topic, callback, once=True)

    def off(self, topic: str, callback: Callback) -> None:
        """Remove the first subscription of ``callback`` to ``topic``."""
        listeners = self._listeners.get(topic)
        if not listeners:
            return
        for listener in listeners:
            if listener.callback == callback:
                listeners.remove(listener)
                break
        if self.debug:
            logger.debug("Unsubscribed from %r", topic)

    def emit(self, topic: str, payload: Any) -> None:
        """Deliver ``payload`` to every subscriber of ``topic``.

        A listener that raises is logged and skipped.
        """
        model = EVENT_PAYLOADS.get(topic)
        if model is not None and isinstance(payload, dict):
            try:
                payload = model.model_validate(payload)
            except ValidationError:
                logger.warning("Dropping invalid %r payload %r", topic, payload, exc_info=True)
                return

        self._history.append(EmittedEvent(topic=topic, payload=payload))
        if self.debug:
            logger.debug("Emitting %r %r", topic, payload)

        listeners = self._listeners.get(topic)
        if not listeners:
            return

        for listener in list(listeners):
            if listener.once and listener in listeners:
                listeners.remove(listener)
            try:
                listener.callback(payload)
            except Exception:
                logger.exception("Error in listener for %r", topic)

    def listener_count(self, topic: str) -> int:
        """Return the number of live subscriptions for ``topic``."""
        return len(self._listeners.get(topic, ()))

    def remove_all_listeners(self, topic: str | None = None) -> None:
        """Drop subscriptions for ``topic``, or for every topic."""
        if topic is None:
            self._listeners.clear()
        else:
            self._listeners.pop(topic, None)

    def history(self) -> list[EmittedEvent]:
        """Return a copy of the recent emissions, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def registered_topics(self) -> list[str]:
        """Return topics that currently have at least one subscriber."""
        return [topic for topic, listeners in self._listeners.items() if listeners]


@lru_cache(maxsize=1)
def default_event_bus() -> EventBus:
    """Return the process-wide bus for applications that want a shared one."""
    return EventBus()
