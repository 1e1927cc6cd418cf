"""
evdispatch Events - Identity
==============================
EventID says what happened. Event carries it to the handlers.

Both are frozen. generator and param are opaque: the registry passes
them through and never looks inside.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable


def _require_hashable(field_name: str, value: Any) -> None:
    try:
        hash(value)
    except TypeError:
        raise TypeError(
            f"EventID.{field_name} must be hashable, "
            f"got {type(value).__name__}."
        ) from None


@dataclass(frozen=True)
class EventID:
    """
    (type, value) pair identifying an occurrence.

    type is the coarse category, value the identity within it.
    Handlers registered on the bare type see every value.
    """

    type: Hashable
    value: Hashable = None

    def __post_init__(self):
        _require_hashable("type", self.type)
        _require_hashable("value", self.value)


@dataclass(frozen=True)
class Event:
    """One dispatched occurrence, as seen by a handler."""

    event_id: EventID
    generator: Any = None
    param: Any = None

    @property
    def type(self) -> Hashable:
        return self.event_id.type

    @property
    def value(self) -> Hashable:
        return self.event_id.value
