"""Base class for typed events published on an EventBus."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DomainEvent(BaseModel):
    """Immutable event payload.

    Subclasses declare their fields; the bus routes on the concrete class.
    """

    model_config = ConfigDict(frozen=True)
