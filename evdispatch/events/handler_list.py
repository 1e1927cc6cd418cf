"""
evdispatch Events - Handler List
==================================
Ordered, keyed handler collection for one type or one (type, value).

Rules:
- Insertion order is dispatch order
- A key appears at most once; re-adding a key replaces its handler
  and once flag in place, keeping its position
- Removal while dispatching is deferred until the pass ends
- Removing an unknown key is a no-op
- Not thread-safe (single dispatching thread per dispatcher)
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterator, Optional

from evdispatch.events.errors import Unregister
from evdispatch.events.handlers import HandlerEntry, as_handler, handler_name
from evdispatch.events.identity import Event, EventID

logger = logging.getLogger("evdispatch.events")


class HandlerList:
    """
    Handlers of one bucket, keyed by caller-chosen handler key.

    The entry dict is both the ordered sequence and the key index,
    so the two can never disagree.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, HandlerEntry] = {}
        self._pending_removals: Optional[list[Hashable]] = None
        self._dispatching: bool = False

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def add(self, key: Hashable, handler: Any, once: bool = False) -> HandlerEntry:
        """
        Register handler under key, or replace the handler already there.

        Raises:
            MissingHandlerError: handler is None or not callable.
        """
        handler = as_handler(key, handler)

        entry = self._entries.get(key)
        if entry is not None:
            entry.handler = handler
            entry.once = once
            logger.debug(
                f"Handler replaced: {key!r} → {handler_name(handler)} "
                f"(once={once})"
            )
            return entry

        entry = HandlerEntry(key=key, handler=handler, once=once)
        self._entries[key] = entry
        logger.debug(
            f"Handler added: {key!r} → {handler_name(handler)} (once={once})"
        )
        return entry

    def remove(self, key: Hashable) -> None:
        """Remove the handler under key. Deferred while dispatching."""
        if key not in self._entries:
            return

        if self._dispatching:
            if self._pending_removals is None:
                self._pending_removals = []
            self._pending_removals.append(key)
            logger.debug(f"Handler removal deferred until pass ends: {key!r}")
            return

        del self._entries[key]
        logger.debug(f"Handler removed: {key!r}")

    def clear(self) -> None:
        self._dispatching = False
        self._entries = {}
        self._pending_removals = None

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def is_empty(self) -> bool:
        return not self._entries

    def keys(self) -> list[Hashable]:
        """Handler keys in dispatch order."""
        return list(self._entries)

    @property
    def is_dispatching(self) -> bool:
        return self._dispatching

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[HandlerEntry]:
        return iter(list(self._entries.values()))

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
        Invoke every handler, head to tail, with one shared Event.

        - Unregister raised → entry removed, next handler runs
        - Any other exception → propagates unchanged; later handlers
          are not invoked and the raising entry stays registered
        - Normal return → entry removed if it was registered once

        The pass walks a snapshot of the entries. Handlers added during
        the pass wait for the next dispatch. Removals requested during
        the pass are applied when it ends, on success or failure.
        """
        event = Event(event_id=event_id, generator=generator, param=param)

        self._dispatching = True
        try:
            for entry in list(self._entries.values()):
                # clear() during the pass drops entries from under us
                if self._entries.get(entry.key) is not entry:
                    continue

                try:
                    entry.call(event)
                except Unregister:
                    self._discard(entry, "unregistered itself")
                    continue
                except Exception as exc:
                    logger.warning(
                        f"Dispatch of {event_id!r} halted by handler "
                        f"{entry.key!r}: {type(exc).__name__}: {exc}"
                    )
                    raise

                if entry.once:
                    self._discard(entry, "fired once")
        finally:
            self._dispatching = False
            self._apply_pending_removals()

    def _discard(self, entry: HandlerEntry, reason: str) -> None:
        if self._entries.get(entry.key) is entry:
            del self._entries[entry.key]
            logger.debug(f"Handler removed ({reason}): {entry.key!r}")

    def _apply_pending_removals(self) -> None:
        pending, self._pending_removals = self._pending_removals, None
        if not pending:
            return
        for key in pending:
            self.remove(key)
