"""A single handler registration on a Signal."""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from type_signals.core.signal import Signal


class Binding:
    """Handle returned by ``Signal.add`` / ``Signal.once``.

    Detaching the binding removes its handler from the owning signal so it no
    longer receives dispatches. The owner link is a weak reference: a binding
    never keeps its signal alive.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        once: bool = False,
        receiver: Any = None,
    ) -> None:
        self._callback = callback
        self._once = once
        self._receiver = receiver

        self._next: Binding | None = None
        self._prev: Binding | None = None
        self._owner: weakref.ref[Signal[Any]] | None = None

    def __repr__(self) -> str:
        state = "attached" if self.owner is not None else "detached"
        kind = "once" if self._once else "add"
        return f"<Binding {kind} {self._callback!r} ({state})>"

    @property
    def callback(self) -> Callable[..., Any]:
        return self._callback

    @property
    def receiver(self) -> Any:
        return self._receiver

    @property
    def once(self) -> bool:
        return self._once

    @property
    def owner(self) -> Signal[Any] | None:
        """The signal currently holding this binding, or None."""
        if self._owner is None:
            return None
        return self._owner()

    def detach(self) -> bool:
        """Detach from the owning signal.

        Returns False if the binding was already detached.
        """
        owner = self.owner
        if owner is None:
            return False

        owner.detach(self)
        return True

    def dispose(self) -> None:
        self.detach()

    def __enter__(self) -> Binding:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def _invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if self._receiver is None:
            self._callback(*args, **kwargs)
        else:
            self._callback(self._receiver, *args, **kwargs)
