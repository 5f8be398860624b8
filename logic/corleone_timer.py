"""logic/corleone_timer.py — Corleone respawn timer feature.

Adapts the host's raw events into calls on the ``ClusterRegistry``:

* ``EntityDied``  → validated → ``registry.observe()``
* ``EntitySeen``  → validated → remember when the boss was last alive
* ``ClientTick``  → ``registry.tick()`` + sighting alert → cues
* ``WorldLoad``   → ``registry.reset()``

Every adapter re-reads the feature flag and the player's location on
each call; nothing about the host is cached.  Events that don't concern
us (most deaths) are ignored and the adapter returns ``False``.

Wiring::

    timer = CorleoneTimer(clock=Clock(), config=cfg, location=loc,
                          sound_queue=SoundQueue())
    timer.register(bus)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import BlockPos, FeatureConfig, LocationInfo, MayorInfo, DevLog
from core import tuning
from core.clock import Clock
from core.constants import (
    BOSS_NAME, BOSS_KIND, BOSS_HEALTH_VALUES,
    SIGHTING_COOLDOWN_TICKS, SIGHTING_WINDOW,
)
from core.events import EntityDied, EntitySeen, ClientTick, WorldLoad
from logic.cluster_registry import ClusterRegistry, ClusterView
from logic.notifications import Cue, SoundQueue, make_burst

if TYPE_CHECKING:
    from core.events import EventBus


class CorleoneTimer:
    """Event ingestion for the boss respawn tracker."""

    def __init__(self, *, registry: ClusterRegistry | None = None,
                 clock: Clock | None = None,
                 config: FeatureConfig | None = None,
                 location: LocationInfo | None = None,
                 mayor: MayorInfo | None = None,
                 sound_queue: SoundQueue | None = None,
                 dev_log: DevLog | None = None):
        self.dev_log = dev_log
        self.registry = registry if registry is not None else ClusterRegistry(dev_log=dev_log)
        self.clock = clock or Clock()
        self.config = config or FeatureConfig(
            corleone_timer=bool(tuning.get("features", "corleone_timer", True)))
        self.location = location or LocationInfo()
        self.mayor = mayor or MayorInfo(health_values=tuple(
            float(v) for v in tuning.get("boss", "health_values", BOSS_HEALTH_VALUES)))
        self.sound_queue = sound_queue

        self.boss_name = str(tuning.get("boss", "name", BOSS_NAME))
        self.boss_kind = str(tuning.get("boss", "entity_kind", BOSS_KIND))
        self.sighting_window = int(tuning.get("timer", "sighting_window", SIGHTING_WINDOW))
        self.sighting_cooldown_reset = int(tuning.get(
            "timer", "sighting_cooldown_ticks", SIGHTING_COOLDOWN_TICKS))

        self.last_seen: int | None = None
        self.sighting_cooldown = 0
        self._cues: list[Cue] = []

    # ── Wiring ───────────────────────────────────────────────────────

    def register(self, bus: EventBus) -> None:
        bus.subscribe("EntityDied", self.on_entity_death)
        bus.subscribe("EntitySeen", self.on_entity_seen)
        bus.subscribe("ClientTick", self.on_tick)
        bus.subscribe("WorldLoad", self.on_world_load)

    # ── Gates ────────────────────────────────────────────────────────

    def active(self) -> bool:
        """Feature enabled and player in the Crystal Hollows, read fresh."""
        return self.config.corleone_timer and self.location.in_crystal_hollows()

    def is_boss(self, name: str, max_health: float, kind: str) -> bool:
        if name != self.boss_name:
            return False
        if max_health not in self.mayor.expected_health_values():
            return False
        return kind == self.boss_kind

    # ── Adapters ─────────────────────────────────────────────────────

    def on_entity_death(self, event: EntityDied) -> bool:
        if not self.active():
            return False
        if not self.is_boss(event.name, event.max_health, event.kind):
            return False

        now = self.clock.now()
        pos = BlockPos.of(event.x, event.y, event.z)
        cluster = self.registry.observe(pos, now)
        print(f"[CORLEONE] kill at {pos} → spawn {cluster.position} "
              f"({len(self.registry)} tracked)")
        return True

    def on_entity_seen(self, event: EntitySeen) -> bool:
        if not self.active():
            return False
        if not self.is_boss(event.name, event.max_health, event.kind):
            return False
        self.last_seen = self.clock.now()
        return True

    def on_tick(self, event: ClientTick | None = None) -> list[Cue]:
        """Run one host tick.  Returns the cues produced this tick."""
        self.clock.advance_tick()
        if not self.active():
            return []

        now = self.clock.now()
        if self.sighting_cooldown > 0:
            self.sighting_cooldown -= 1
        if not self.registry and not self._sighting_fresh(now):
            return []

        cues = self.registry.tick(now)
        if self._sighting_due(now):
            cues.extend(make_burst(self.registry.sound_id))
            if self.dev_log is not None:
                self.dev_log.record("notify", "boss sighted", t=now)

        if cues:
            self._cues.extend(cues)
            if self.sound_queue is not None:
                self.sound_queue.extend(self.drain_cues())
        return cues

    def on_world_load(self, event: WorldLoad | None = None) -> None:
        """Drop everything; positions from the previous world mean nothing."""
        if self.registry:
            print(f"[CORLEONE] world changed — dropping {len(self.registry)} spawn(s)")
        self.registry.reset(self.clock.now())
        self.last_seen = None
        self.sighting_cooldown = 0
        self._cues.clear()

    # ── Exposed to render / sound collaborators ──────────────────────

    def snapshot(self) -> list[ClusterView]:
        if not self.active():
            return []
        return self.registry.snapshot(self.clock.now())

    def drain_cues(self) -> list[Cue]:
        """Hand over every cue produced since the last drain."""
        cues = self._cues
        self._cues = []
        return cues

    # ── Internal ─────────────────────────────────────────────────────

    def _sighting_fresh(self, now: int) -> bool:
        return self.last_seen is not None and self.last_seen + self.sighting_window > now

    def _sighting_due(self, now: int) -> bool:
        if self._sighting_fresh(now) and self.sighting_cooldown <= 0:
            self.sighting_cooldown = self.sighting_cooldown_reset
            return True
        return False
