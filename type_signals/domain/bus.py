"""Simple synchronous in-process event bus built on signals."""

from __future__ import annotations

import logging
from typing import Any, Callable

from type_signals.core.binding import Binding
from type_signals.core.signal import Signal

logger = logging.getLogger(__name__)


class EventBus:
    """Publish/subscribe bus keyed by event type.

    Each event type gets its own ``Signal``, so handlers are called
    synchronously in registration order and the usual once/filter/proxy
    behaviour applies per topic. Routing is on the exact class of the
    published event.
    """

    def __init__(self) -> None:
        self._signals: dict[type, Signal[Any]] = {}

    def signal(self, event_type: type) -> Signal[Any]:
        """Return the signal for ``event_type``, creating it on first use."""
        signal = self._signals.get(event_type)
        if signal is None:
            signal = Signal()
            self._signals[event_type] = signal
            logger.debug("Created signal for %s", event_type.__name__)
        return signal

    def subscribe(
        self, event_type: type, handler: Callable[..., Any], receiver: Any = None
    ) -> Binding:
        return self.signal(event_type).add(handler, receiver)

    def subscribe_once(
        self, event_type: type, handler: Callable[..., Any], receiver: Any = None
    ) -> Binding:
        return self.signal(event_type).once(handler, receiver)

    def unsubscribe(self, event_type: type, binding: Binding) -> bool:
        """Detach ``binding`` from the ``event_type`` topic.

        Returns False if the binding was not attached to that topic.
        """
        signal = self._signals.get(event_type)
        if signal is None or not signal.has(binding):
            return False
        signal.detach(binding)
        return True

    def publish(self, event: Any) -> bool:
        """Dispatch ``event`` to the handlers subscribed to its type.

        Returns False when nothing was dispatched.
        """
        signal = self._signals.get(type(event))
        if signal is None or not signal.has_any():
            logger.debug("No subscribers for %s", type(event).__name__)
            return False
        return signal.dispatch(event)

    def has_subscribers(self, event_type: type) -> bool:
        signal = self._signals.get(event_type)
        return signal is not None and signal.has_any()

    def topics(self) -> list[type]:
        """Event types that currently have at least one subscriber."""
        return [t for t, signal in self._signals.items() if signal.has_any()]

    def clear(self, event_type: type | None = None) -> None:
        """Detach every handler from one topic, or from all topics."""
        if event_type is not None:
            signal = self._signals.get(event_type)
            if signal is not None:
                signal.detach_all()
            return

        for signal in self._signals.values():
            signal.detach_all()
