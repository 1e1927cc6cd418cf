"""
evdispatch Events - Dispatcher
================================
Routes event identifiers to registered handlers.

Dispatch behavior:
1. Look up the bucket for event_id.type (none → no-op)
2. Refuse nested dispatch (NestedDispatchError)
3. Run type-level handlers, then handlers for event_id.value
4. Stop at the first hard handler error and re-raise it unchanged
5. Drop the bucket if nothing is left in it

This module does NOT:
- Catch or wrap handler errors
- Lock (one dispatching thread per dispatcher)
- Interpret generator or param
- Order handlers other than by insertion
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Optional

from evdispatch.config.settings import DEFAULT_CONFIG, DispatcherConfig
from evdispatch.events.buckets import TypeBucket
from evdispatch.events.errors import NestedDispatchError
from evdispatch.events.handlers import as_handler
from evdispatch.events.identity import EventID

logger = logging.getLogger("evdispatch.events")


class EventDispatcher:
    """
    Two-tier handler registry keyed by event type and (type, value).

    Usage:
        dispatcher = EventDispatcher()

        dispatcher.add_type_handler("order", "audit", audit_handler)
        dispatcher.add_handler(EventID("order", "paid"), "mailer", send_receipt)

        dispatcher.dispatch(EventID("order", "paid"), generator=shop, param=order)
        # audit_handler, then send_receipt

    A bucket exists in the registry only while it holds handlers.
    """

    def __init__(self, config: Optional[DispatcherConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._buckets: dict[Hashable, TypeBucket] = {}
        self._dispatching: bool = False
        self._active_event_id: Optional[EventID] = None

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def add_type_handler(
        self,
        event_type: Hashable,
        key: Hashable,
        handler: Any,
        once: bool = False,
    ) -> None:
        """
        Register a handler for every value of event_type.

        Args:
            event_type: Event type to listen to
            key:        Handler key, used for replacement and removal
            handler:    Object with handle_event(event), or a callable
            once:       Remove after the first successful invocation

        Raises:
            MissingHandlerError: handler is None or not callable.
        """
        handler = as_handler(key, handler)
        self._get_or_create_bucket(event_type).add_type_handler(
            key, handler, once
        )

    def add_handler(
        self,
        event_id: EventID,
        key: Hashable,
        handler: Any,
        once: bool = False,
    ) -> None:
        """
        Register a handler for one (type, value) pair.

        Raises:
            MissingHandlerError: handler is None or not callable.
        """
        handler = as_handler(key, handler)
        self._get_or_create_bucket(event_id.type).add_value_handler(
            event_id.value, key, handler, once
        )

    def remove_type_handler(self, event_type: Hashable, key: Hashable) -> None:
        bucket = self._buckets.get(event_type)
        if bucket is None:
            return
        bucket.remove_type_handler(key)
        self._prune_bucket(event_type, bucket)

    def remove_handler(self, event_id: EventID, key: Hashable) -> None:
        bucket = self._buckets.get(event_id.type)
        if bucket is None:
            return
        bucket.remove_value_handler(event_id.value, key)
        self._prune_bucket(event_id.type, bucket)

    def clear(self) -> None:
        """Drop every registration and reset the dispatch state."""
        for bucket in self._buckets.values():
            bucket.clear()
        self._buckets = {}
        self._dispatching = False
        self._active_event_id = None
        logger.debug(f"[{self._config.name}] All handlers cleared")

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def dispatch(
        self,
        event_id: EventID,
        generator: Any = None,
        param: Any = None,
    ) -> None:
        """
        Deliver event_id to its handlers.

        Args:
            event_id:  What happened
            generator: Who produced it (opaque, passed through)
            param:     Payload (opaque, passed through)

        Raises:
            NestedDispatchError: Called while this dispatcher is already
                                 dispatching (e.g. from inside a handler).
            Exception:           The first hard error raised by a handler,
                                 unchanged.
        """
        bucket = self._buckets.get(event_id.type)
        if bucket is None:
            return

        if self._dispatching:
            logger.error(
                f"[{self._config.name}] Nested dispatch of {event_id!r} "
                f"while dispatching {self._active_event_id!r}"
            )
            raise NestedDispatchError(event_id, self._active_event_id)

        if self._config.log_dispatch:
            logger.log(
                self._config.level,
                f"[{self._config.name}] Dispatching {event_id!r} to "
                f"{bucket.handler_count(event_id.value)} handler(s)",
            )

        self._dispatching = True
        self._active_event_id = event_id
        try:
            bucket.dispatch(event_id, generator, param)
        finally:
            self._dispatching = False
            self._active_event_id = None
            self._prune_bucket(event_id.type, bucket)

    @property
    def is_dispatching(self) -> bool:
        return self._dispatching

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def has_handlers(self, event_type: Hashable) -> bool:
        """Check if any handler (either tier) exists for event_type."""
        return event_type in self._buckets

    def event_types(self) -> frozenset:
        """Return all event types with registered handlers."""
        return frozenset(self._buckets)

    def handler_count(self, event_id_or_type: Any) -> int:
        """
        Count handlers.

        EventID → handlers that would run for that exact identifier.
        Bare type → type-level handlers only.
        """
        if isinstance(event_id_or_type, EventID):
            bucket = self._buckets.get(event_id_or_type.type)
            if bucket is None:
                return 0
            return bucket.handler_count(event_id_or_type.value)

        bucket = self._buckets.get(event_id_or_type)
        return bucket.handler_count() if bucket is not None else 0

    # ══════════════════════════════════════════════════════════
    # BUCKETS
    # ══════════════════════════════════════════════════════════

    def _get_or_create_bucket(self, event_type: Hashable) -> TypeBucket:
        bucket = self._buckets.get(event_type)
        if bucket is None:
            bucket = TypeBucket(event_type)
            self._buckets[event_type] = bucket
        return bucket

    def _prune_bucket(self, event_type: Hashable, bucket: TypeBucket) -> None:
        if bucket.is_empty() and self._buckets.get(event_type) is bucket:
            del self._buckets[event_type]
            logger.debug(
                f"[{self._config.name}] Event type dropped: {event_type!r}"
            )
