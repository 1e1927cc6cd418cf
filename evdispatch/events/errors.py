"""
evdispatch Events - Errors
============================
Error types for the handler registry.

Three kinds of failure exist:
- Unregister: raised BY a handler to remove itself. Consumed by the
  registry, never seen by the dispatch caller.
- Misuse faults (nested dispatch, missing handler): raised BY the
  registry. They signal a bug in caller code and have no recovery path.
- Anything else a handler raises is a hard handler error. It is not
  defined here and propagates to the dispatch caller unchanged.
"""

from __future__ import annotations

from typing import Any, Optional


class Unregister(Exception):
    """
    Self-unregister signal.

    A handler raises this to say "invoke me no more". The entry is
    removed after the current invocation and dispatch continues with
    the next handler.
    """
    pass


class EventDispatchError(Exception):
    """Base error for registry misuse."""
    pass


class NestedDispatchError(EventDispatchError):
    """Dispatch requested while the same dispatcher is already dispatching."""

    def __init__(self, event_id: Any, active_event_id: Optional[Any] = None):
        self.event_id = event_id
        self.active_event_id = active_event_id
        super().__init__(
            f"Nested dispatch of {event_id!r} while {active_event_id!r} "
            f"is still being dispatched."
        )


class MissingHandlerError(EventDispatchError):
    """Registration attempted without a usable handler."""

    def __init__(self, key: Any, handler: Any = None):
        self.key = key
        self.handler = handler
        super().__init__(
            f"Handler for key {key!r} must be callable or expose "
            f"handle_event(), got {type(handler).__name__}."
        )
