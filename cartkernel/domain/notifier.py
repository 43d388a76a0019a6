"""Change notification.

Synchronous fan-out of events to subscribed listeners.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger()

E = TypeVar("E")

Listener = Callable[[E], None]


class ChangeNotifier(Generic[E]):
    """Delivers events to listeners in subscription order.

    Subscriptions have set semantics: registering the same listener twice
    keeps a single registration at its original position.

    The listener set is copied when a ``notify`` call starts. A listener
    that unsubscribes while an event is being delivered still receives
    that event; a listener that subscribes mid-delivery first hears the
    next one.

    A listener that raises is logged and skipped; the remaining listeners
    still receive the event.
    """

    def __init__(self) -> None:
        self._listeners: dict[Listener[E], None] = {}

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener[E]) -> None:
        """Register a listener. Registering it again is a no-op."""
        self._listeners.setdefault(listener, None)

    def unsubscribe(self, listener: Listener[E]) -> None:
        """Deregister a listener. Unknown listeners are ignored."""
        self._listeners.pop(listener, None)

    def notify(self, event: E) -> int:
        """Deliver ``event`` to every subscribed listener.

        Args:
            event: Event to deliver.

        Returns:
            Number of listeners that raised while handling the event.
        """
        failures = 0
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                failures += 1
                logger.exception(
                    "Listener failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    event_repr=repr(event),
                )
        return failures
