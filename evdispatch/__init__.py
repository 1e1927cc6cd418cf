"""
evdispatch - In-process event dispatch registry
=================================================
Handlers register by event type or by (type, value).
Dispatch runs type-level handlers first, then value-level ones,
in insertion order.
"""

from evdispatch.config import DEFAULT_CONFIG, DispatcherConfig
from evdispatch.events import (
    CallbackEventHandler,
    Event,
    EventDispatcher,
    EventDispatchError,
    EventHandler,
    EventID,
    MissingHandlerError,
    NestedDispatchError,
    Unregister,
)

__version__ = "1.0.0"

__all__ = [
    "EventDispatcher",
    "EventID",
    "Event",
    "EventHandler",
    "CallbackEventHandler",
    "Unregister",
    "EventDispatchError",
    "NestedDispatchError",
    "MissingHandlerError",
    "DispatcherConfig",
    "DEFAULT_CONFIG",
]
