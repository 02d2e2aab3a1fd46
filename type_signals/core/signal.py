"""Synchronous in-process signal dispatcher."""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Generic, ParamSpec

from type_signals.core.binding import Binding

logger = logging.getLogger(__name__)

P = ParamSpec("P")


class Signal(Generic[P]):
    """Dispatcher that calls bound handlers in registration order.

    Handlers are held in an intrusive doubly linked list of ``Binding``
    objects so that add and detach are O(1), including from inside a
    handler while a dispatch is walking the list.

    ``Signal[[int, str]]`` declares a signal whose handlers (and filter)
    take ``(int, str)``.
    """

    def __init__(self) -> None:
        self._head: Binding | None = None
        self._tail: Binding | None = None
        self._filter: Callable[P, bool] | None = None

    def __repr__(self) -> str:
        return f"<Signal handlers={len(self.handlers())}>"

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def handlers(self) -> list[Binding]:
        """Return a snapshot of the attached bindings, head to tail."""
        bindings: list[Binding] = []
        node = self._head
        while node is not None:
            bindings.append(node)
            node = node._next
        return bindings

    def has_any(self) -> bool:
        return self._head is not None

    def has(self, binding: Binding) -> bool:
        """Return True if ``binding`` is owned by this signal."""
        return getattr(binding, "owner", None) is self

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, callback: Callable[..., Any], receiver: Any = None) -> Binding:
        """Bind a handler that is called on every dispatch.

        When ``receiver`` is given it is passed as the first positional
        argument, ahead of the dispatch arguments.
        """
        return self._append(Binding(callback, once=False, receiver=receiver))

    def once(self, callback: Callable[..., Any], receiver: Any = None) -> Binding:
        """Bind a handler that is detached as soon as it is dispatched to."""
        return self._append(Binding(callback, once=True, receiver=receiver))

    def detach(self, binding: Binding) -> Signal[P]:
        """Detach ``binding`` if this signal owns it. Foreign bindings are ignored."""
        if not self.has(binding):
            return self

        prev = binding._prev
        nxt = binding._next

        if prev is not None:
            prev._next = nxt
        else:
            self._head = nxt

        if nxt is not None:
            nxt._prev = prev
        else:
            self._tail = prev

        # _next is left alone so a dispatch currently sitting on this
        # binding can still advance past it.
        binding._prev = None
        binding._owner = None
        return self

    def detach_all(self) -> Signal[P]:
        node = self._head
        if node is None:
            return self

        self._head = None
        self._tail = None

        count = 0
        while node is not None:
            node._owner = None
            node = node._next
            count += 1

        logger.debug("Detached %d binding(s) from %r", count, self)
        return self

    # ------------------------------------------------------------------
    # Gating / composition
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[P, bool] | None) -> None:
        """Install a gating predicate, replacing any previous one.

        The predicate takes the dispatch arguments; a dispatch only reaches
        the handlers when it returns a truthy value. ``None`` removes it.
        """
        self._filter = predicate

    def proxy(self, *signals: Signal[P]) -> Signal[P]:
        """Re-dispatch this signal whenever any of ``signals`` is dispatched.

        The link is an ordinary binding on each upstream signal; no handle to
        it is returned.
        """

        def forward(*args: P.args, **kwargs: P.kwargs) -> None:
            self.dispatch(*args, **kwargs)

        for upstream in signals:
            upstream.add(forward)
            logger.debug("Proxying %r -> %r", upstream, self)

        return self

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, *args: P.args, **kwargs: P.kwargs) -> bool:
        """Call every bound handler with the given arguments.

        Returns False without calling anything when no handlers are bound or
        the filter rejects the arguments; True otherwise. Exceptions raised by
        a handler propagate and abort the rest of the walk.
        """
        node = self._head
        if node is None:
            return False

        if self._filter is not None and not self._filter(*args, **kwargs):
            return False

        while node is not None:
            if node.owner is self:
                if node.once:
                    self.detach(node)
                node._invoke(args, kwargs)
            node = node._next

        return True

    def _append(self, binding: Binding) -> Binding:
        if self._tail is None:
            self._head = binding
        else:
            self._tail._next = binding
            binding._prev = self._tail

        self._tail = binding
        binding._owner = weakref.ref(self)
        return binding
