"""
evdispatch Events - Public API
================================
Register handlers by type or (type, value). Dispatch by EventID.
"""

from evdispatch.events.buckets import TypeBucket
from evdispatch.events.dispatcher import EventDispatcher
from evdispatch.events.errors import (
    EventDispatchError,
    MissingHandlerError,
    NestedDispatchError,
    Unregister,
)
from evdispatch.events.handler_list import HandlerList
from evdispatch.events.handlers import (
    CallbackEventHandler,
    EventCallback,
    EventHandler,
    HandlerEntry,
    as_handler,
)
from evdispatch.events.identity import Event, EventID

__all__ = [
    "EventDispatcher",
    "TypeBucket",
    "HandlerList",
    "HandlerEntry",
    "EventHandler",
    "EventCallback",
    "CallbackEventHandler",
    "as_handler",
    "Event",
    "EventID",
    "Unregister",
    "EventDispatchError",
    "NestedDispatchError",
    "MissingHandlerError",
]
