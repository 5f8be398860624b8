"""core/events.py — Host event feed + lightweight event bus.

The host simulation (game client, replay file, or the viewer scene)
reports what happened by emitting plain dataclasses onto the bus::

    from core.events import EventBus, EntityDied
    bus = EventBus()
    bus.emit(EntityDied(name="Team Treasurite", max_health=1e6,
                        x=10.5, y=64.0, z=-3.2, kind="other_player"))

Features subscribe with a callable::

    bus.subscribe("EntityDied", timer.on_entity_death)

And the host drains once per frame::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict
import traceback


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class EntityDied:
    """A living entity died somewhere the client can see."""
    name: str = ""
    max_health: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    kind: str = ""            # entity archetype, e.g. "other_player"


@dataclass
class EntitySeen:
    """A living entity was rendered this frame."""
    name: str = ""
    max_health: float = 0.0
    kind: str = ""


@dataclass
class ClientTick:
    """One fixed simulation step of the host (20 per second)."""


@dataclass
class WorldLoad:
    """The host loaded a new world — every tracked position is stale."""
    mode: str = ""


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus shared by the host and the features."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"ClientTick"``.
        """
        self._subs[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: Callable) -> bool:
        """Remove *handler*; returns False if it was not subscribed."""
        handlers = self._subs.get(event_type)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        A failing handler is reported and skipped; the remaining
        handlers and events still run.
        """
        processed = 0
        safety = 1000  # caps handlers that keep re-emitting
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in list(self._subs.get(name, [])):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        """Number of events waiting to be drained."""
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
