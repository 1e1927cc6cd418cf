"""
evdispatch Events - Type Bucket
=================================
All handlers registered for one event type.

Two tiers:
- type level:  handlers on the bare type, see every value
- value level: handlers on one (type, value) pair

Dispatch order: type level first, then the list for the event's value.
A hard error from the type level stops the dispatch before the value
level runs.

Containers are created on first add and dropped the moment they become
empty. No empty HandlerList is ever reachable from a bucket.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Optional

from evdispatch.events.handler_list import HandlerList
from evdispatch.events.handlers import as_handler
from evdispatch.events.identity import EventID

logger = logging.getLogger("evdispatch.events")

_ANY_VALUE = object()


class TypeBucket:
    """Type-level HandlerList plus value → HandlerList mapping."""

    def __init__(self, event_type: Hashable) -> None:
        self.event_type = event_type
        self._type_handlers: Optional[HandlerList] = None
        self._value_handlers: Optional[dict[Hashable, HandlerList]] = None

    # ══════════════════════════════════════════════════════════
    # TYPE LEVEL
    # ══════════════════════════════════════════════════════════

    def add_type_handler(
        self, key: Hashable, handler: Any, once: bool = False
    ) -> None:
        handler = as_handler(key, handler)
        if self._type_handlers is None:
            self._type_handlers = HandlerList()
        self._type_handlers.add(key, handler, once)

    def remove_type_handler(self, key: Hashable) -> None:
        if self._type_handlers is None:
            return
        self._type_handlers.remove(key)
        self._prune_type_handlers(self._type_handlers)

    # ══════════════════════════════════════════════════════════
    # VALUE LEVEL
    # ══════════════════════════════════════════════════════════

    def add_value_handler(
        self, value: Hashable, key: Hashable, handler: Any, once: bool = False
    ) -> None:
        handler = as_handler(key, handler)
        if self._value_handlers is None:
            self._value_handlers = {}

        handlers = self._value_handlers.get(value)
        if handlers is None:
            handlers = HandlerList()
            self._value_handlers[value] = handlers

        handlers.add(key, handler, once)

    def remove_value_handler(self, value: Hashable, key: Hashable) -> None:
        if self._value_handlers is None:
            return
        handlers = self._value_handlers.get(value)
        if handlers is None:
            return
        handlers.remove(key)
        self._prune_value_handlers(value, handlers)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def is_empty(self) -> bool:
        return self._type_handlers is None and self._value_handlers is None

    def values(self) -> frozenset:
        """Values that currently have value-level handlers."""
        if self._value_handlers is None:
            return frozenset()
        return frozenset(self._value_handlers)

    def handler_count(self, value: Hashable = _ANY_VALUE) -> int:
        """
        Count handlers.

        Without value: type-level handlers only.
        With value: type-level handlers plus that value's handlers,
        i.e. how many would run for EventID(type, value).
        """
        count = len(self._type_handlers) if self._type_handlers else 0
        if value is _ANY_VALUE or self._value_handlers is None:
            return count
        handlers = self._value_handlers.get(value)
        return count + (len(handlers) if handlers else 0)

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def dispatch(
        self,
        event_id: EventID,
        generator: Any = None,
        param: Any = None,
    ) -> None:
        type_handlers = self._type_handlers
        if type_handlers is not None:
            try:
                type_handlers.dispatch(event_id, generator, param)
            finally:
                self._prune_type_handlers(type_handlers)

        if self._value_handlers is None:
            return
        value_handlers = self._value_handlers.get(event_id.value)
        if value_handlers is None:
            return
        try:
            value_handlers.dispatch(event_id, generator, param)
        finally:
            self._prune_value_handlers(event_id.value, value_handlers)

    def clear(self) -> None:
        if self._value_handlers is not None:
            for handlers in self._value_handlers.values():
                handlers.clear()
        self._value_handlers = None

        if self._type_handlers is not None:
            self._type_handlers.clear()
            self._type_handlers = None

    # ══════════════════════════════════════════════════════════
    # PRUNING
    # ══════════════════════════════════════════════════════════

    def _prune_type_handlers(self, handlers: HandlerList) -> None:
        if handlers.is_empty() and self._type_handlers is handlers:
            self._type_handlers = None
            logger.debug(f"Type-level handlers dropped: {self.event_type!r}")

    def _prune_value_handlers(self, value: Hashable, handlers: HandlerList) -> None:
        if not handlers.is_empty() or self._value_handlers is None:
            return
        if self._value_handlers.get(value) is handlers:
            del self._value_handlers[value]
            logger.debug(
                f"Value-level handlers dropped: {self.event_type!r}/{value!r}"
            )
        if not self._value_handlers:
            self._value_handlers = None
