"""Per-run event channel.

Each compile run owns one EventChannel: a table of callbacks keyed by
event kind. Listeners register before the run starts and receive only
that run's events. Disposing the channel detaches every listener; later
emits are dropped.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from stylekit_core.compiler.models import (
    EventKind,
    JobFailed,
    JobSucceeded,
    RunEvent,
    RunFinished,
    RunStarted,
)

logger = structlog.get_logger(__name__)

Callback = Callable[[Any], None]


class Subscription:
    """Handle returned by a registration; ``dispose()`` unregisters it."""

    def __init__(self, channel: EventChannel, kind: EventKind, callback: Callback) -> None:
        self._channel: EventChannel | None = channel
        self._kind = kind
        self._callback = callback

    def dispose(self) -> None:
        if self._channel is not None:
            self._channel._remove(self._kind, self._callback)
            self._channel = None


class EventChannel:
    """Callback registration table for one run.

    Example:
        >>> channel = EventChannel()
        >>> channel.on_error(lambda event: print(f"Compile {event.name} error"))
        >>> channel.on_finished(lambda event: print("done"))
    """

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[Callback]] | None = {kind: [] for kind in EventKind}

    @property
    def disposed(self) -> bool:
        return self._handlers is None

    def on(self, kind: EventKind, callback: Callback) -> Subscription:
        """Register ``callback`` for events of ``kind``."""
        if self._handlers is None:
            msg = "Cannot subscribe to a disposed event channel"
            raise RuntimeError(msg)
        self._handlers[kind].append(callback)
        return Subscription(self, kind, callback)

    def on_start(self, callback: Callable[[RunStarted], None]) -> Subscription:
        return self.on(EventKind.START, callback)

    def on_success(self, callback: Callable[[JobSucceeded], None]) -> Subscription:
        return self.on(EventKind.SUCCESS, callback)

    def on_error(self, callback: Callable[[JobFailed], None]) -> Subscription:
        return self.on(EventKind.ERROR, callback)

    def on_finished(self, callback: Callable[[RunFinished], None]) -> Subscription:
        return self.on(EventKind.FINISHED, callback)

    def emit(self, event: RunEvent) -> bool:
        """Deliver ``event`` to its listeners.

        A listener that raises is logged and does not stop delivery to the
        remaining listeners or the run itself.

        Returns:
            False if the channel was disposed and the event was dropped.
        """
        if self._handlers is None:
            logger.debug("event_dropped", kind=event.kind.value)
            return False
        for callback in list(self._handlers[event.kind]):
            try:
                callback(event)
            except Exception:
                logger.exception("event_listener_failed", kind=event.kind.value)
        return True

    def dispose(self) -> None:
        """Detach all listeners."""
        self._handlers = None

    def _remove(self, kind: EventKind, callback: Callback) -> None:
        if self._handlers is not None and callback in self._handlers[kind]:
            self._handlers[kind].remove(callback)
