"""
evdispatch Events - Handler Contract
======================================
Anything with handle_event(event) is a handler.
Plain callables are adapted with CallbackEventHandler.

A handler returns normally on success, raises Unregister to remove
itself, or raises anything else to halt the dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Protocol

from evdispatch.events.errors import MissingHandlerError
from evdispatch.events.identity import Event


# ══════════════════════════════════════════════════════════════
# HANDLER PROTOCOL
# ══════════════════════════════════════════════════════════════

class EventHandler(Protocol):
    """Receives dispatched events."""

    def handle_event(self, event: Event) -> None:
        ...  # pragma: no cover


EventCallback = Callable[[Event], None]


class CallbackEventHandler:
    """Adapts a plain function to the EventHandler protocol."""

    __slots__ = ("callback",)

    def __init__(self, callback: EventCallback) -> None:
        self.callback = callback

    def handle_event(self, event: Event) -> None:
        self.callback(event)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackEventHandler({name})"


def as_handler(key: Hashable, handler: Any) -> EventHandler:
    """
    Normalize a registration argument into an EventHandler.

    Raises:
        MissingHandlerError: handler is None or neither a handler
                             object nor a callable.
    """
    if handler is None:
        raise MissingHandlerError(key, handler)

    if callable(getattr(handler, "handle_event", None)):
        return handler

    if callable(handler):
        return CallbackEventHandler(handler)

    raise MissingHandlerError(key, handler)


def handler_name(handler: EventHandler) -> str:
    if isinstance(handler, CallbackEventHandler):
        handler = handler.callback
    return getattr(handler, "__qualname__", type(handler).__qualname__)


# ══════════════════════════════════════════════════════════════
# HANDLER ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass
class HandlerEntry:
    """
    One registration inside a HandlerList.

    Mutable: re-adding the same key swaps handler and once in place,
    so the entry keeps its position in dispatch order.
    """

    key: Hashable
    handler: EventHandler
    once: bool = False

    def call(self, event: Event) -> None:
        self.handler.handle_event(event)
