"""test_corleone_timer.py — Event ingestion for the Corleone timer.

Drives ``CorleoneTimer`` with a hand-stepped clock and checks:
1. Death validation (feature flag, zone, name, health, archetype)
2. Tick routing, cue draining and the sound queue hand-off
3. World load reset
4. The boss sighting alert
5. Wiring through the EventBus

Run: python test_corleone_timer.py
"""
from __future__ import annotations
import sys, traceback

from components import BlockPos, DevLog, FeatureConfig, LocationInfo, MayorInfo
from core.clock import Clock
from core.constants import SECOND_IN_NS, CRYSTAL_HOLLOWS_MODE
from core.events import EventBus, EntityDied, EntitySeen, ClientTick, WorldLoad
from logic.cluster_registry import ClusterRegistry
from logic.corleone_timer import CorleoneTimer
from logic.notifications import SoundQueue


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    print(f"  [FAIL] {label}")
    if detail:
        for line in detail.strip().splitlines():
            print(f"         {line}")


class _FakeTime:
    """Monotonic nanosecond source stepped by hand."""

    def __init__(self):
        self.ns = 0

    def __call__(self) -> int:
        return self.ns

    def at(self, seconds: float):
        self.ns = int(seconds * SECOND_IN_NS)


def _make(**kw):
    fake = _FakeTime()
    params = dict(
        registry=ClusterRegistry(min_delay=60, max_delay=120, expiry=240,
                                 merge_distance_sq=400, cooldown_ticks=400,
                                 sound_id="random.orb"),
        clock=Clock(ns_source=fake),
        config=FeatureConfig(corleone_timer=True),
        location=LocationInfo(in_skyblock=True, mode=CRYSTAL_HOLLOWS_MODE),
        mayor=MayorInfo(),
    )
    params.update(kw)
    return CorleoneTimer(**params), fake


def _kill(x=10.0, y=64.0, z=10.0, *, name="Team Treasurite",
          hp=1_000_000.0, kind="other_player") -> EntityDied:
    return EntityDied(name=name, max_health=hp, x=x, y=y, z=z, kind=kind)


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  DEATH VALIDATION
# ═══════════════════════════════════════════════════════════════════════

def test_death_validation():
    print("\n=== 1: Death validation ===")
    timer, _ = _make()

    assert not timer.on_entity_death(_kill(name="Goblin"))
    assert not timer.on_entity_death(_kill(hp=1_500_000.0))
    assert not timer.on_entity_death(_kill(kind="zombie"))
    assert len(timer.registry) == 0
    ok("Wrong name / health / archetype are ignored")

    for hp in (1e6, 2e6, 4e6, 8e6):
        assert timer.on_entity_death(_kill(x=hp / 1000, hp=hp))
    assert len(timer.registry) == 4
    ok("Every mayor health tier is accepted")

    timer, _ = _make()
    assert timer.on_entity_death(_kill(x=10.7, y=64.2, z=-3.2))
    assert timer.snapshot()[0].position == BlockPos(10, 64, -4)
    ok("Entity position is floored onto the block grid")


def test_gates_read_fresh():
    print("\n=== 1b: Feature / zone gates ===")
    cfg = FeatureConfig(corleone_timer=False)
    loc = LocationInfo(in_skyblock=True, mode=CRYSTAL_HOLLOWS_MODE)
    timer, _ = _make(config=cfg, location=loc)

    assert not timer.on_entity_death(_kill())
    cfg.corleone_timer = True
    assert timer.on_entity_death(_kill())
    ok("Feature flag is re-read on every call")

    loc.mode = "dwarven_mines"
    assert not timer.on_entity_death(_kill(x=500))
    assert timer.snapshot() == []
    loc.mode = CRYSTAL_HOLLOWS_MODE
    assert len(timer.snapshot()) == 1
    ok("Outside the Hollows nothing is observed or rendered")

    loc.in_skyblock = False
    assert not timer.active()
    ok("Not on Skyblock → inactive even with the right mode")

    timer, _ = _make(mayor=MayorInfo(name="Cole", health_values=(2e6,)))
    assert not timer.on_entity_death(_kill(hp=1e6))
    assert timer.on_entity_death(_kill(hp=2e6))
    ok("Difficulty signal narrows the accepted health values")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  TICK ROUTING
# ═══════════════════════════════════════════════════════════════════════

def test_tick_and_drain():
    print("\n=== 2a: Tick routing ===")
    timer, fake = _make()
    fake.at(0)
    timer.on_entity_death(_kill())

    fake.at(70)
    assert timer.on_tick() == []
    fake.at(130)
    cues = timer.on_tick()
    assert len(cues) == 8
    ok("Overdue spawn produces the burst on the tick")

    drained = timer.drain_cues()
    assert drained == cues
    assert timer.drain_cues() == []
    ok("drain_cues() hands cues over exactly once")

    assert timer.clock.ticks == 2
    ok("Every tick advances the clock adapter's tick counter")


def test_tick_to_sound_queue():
    print("\n=== 2b: Sound queue hand-off ===")
    queue = SoundQueue(player=lambda cue: None)
    timer, fake = _make(sound_queue=queue)
    timer.on_entity_death(_kill())
    fake.at(125)
    timer.on_tick()

    assert queue.pending() == 8
    assert timer.drain_cues() == []
    ok("With a queue attached, cues go straight to it")


def test_tick_gated():
    print("\n=== 2c: Tick gating ===")
    loc = LocationInfo(in_skyblock=True, mode=CRYSTAL_HOLLOWS_MODE)
    timer, fake = _make(location=loc)
    timer.on_entity_death(_kill())

    loc.mode = "hub"
    fake.at(500)
    assert timer.on_tick() == []
    assert timer.clock.ticks == 1
    ok("Out of zone: tick counted but nothing expired or notified")

    loc.mode = CRYSTAL_HOLLOWS_MODE
    assert timer.on_tick() == []
    assert len(timer.registry) == 0
    ok("Back in zone the stale spawn expires on the next tick")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 3:  WORLD LOAD
# ═══════════════════════════════════════════════════════════════════════

def test_world_load_resets():
    print("\n=== 3: World load ===")
    timer, fake = _make()
    timer.on_entity_death(_kill(x=0))
    timer.on_entity_death(_kill(x=300))
    fake.at(130)
    timer.on_tick()

    timer.on_world_load(WorldLoad(mode="hub"))
    assert timer.snapshot() == []
    assert timer.drain_cues() == []
    assert timer.on_tick() == []
    ok("World load clears spawns and pending cues")

    log = DevLog()
    timer, fake = _make(registry=ClusterRegistry(dev_log=log, min_delay=60,
                                                 max_delay=120, expiry=240))
    fake.at(10)
    timer.on_entity_death(_kill())
    fake.at(95)
    timer.on_world_load(WorldLoad(mode="hub"))
    entry = log.recent(1)[0]
    assert entry["msg"].startswith("reset")
    assert entry["t"] == 95
    ok("Reset is logged at the time of the world change")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 4:  SIGHTING ALERT
# ═══════════════════════════════════════════════════════════════════════

def test_sighting_alert():
    print("\n=== 4: Sighting alert ===")
    timer, fake = _make()
    fake.at(5)
    assert not timer.on_entity_seen(EntitySeen(name="Goblin", max_health=1e6,
                                               kind="other_player"))
    assert timer.on_entity_seen(EntitySeen(name="Team Treasurite",
                                           max_health=1e6, kind="other_player"))
    assert timer.last_seen == 5

    assert len(timer.on_tick()) == 8
    ok("Fresh sighting alerts even with no tracked spawn")

    assert timer.on_tick() == []
    ok("Sighting cooldown suppresses the next tick")

    fake.at(6)
    assert timer.on_tick() == []
    ok("Sighting older than the window is not fresh")


def test_sighting_cooldown_runs_while_idle():
    print("\n=== 4b: Sighting cooldown while idle ===")
    timer, fake = _make()
    boss = EntitySeen(name="Team Treasurite", max_health=1e6, kind="other_player")

    fake.at(5)
    timer.on_entity_seen(boss)
    assert len(timer.on_tick()) == 8

    for i in range(12000):
        fake.at(6 + i / 20)
        assert timer.on_tick() == []
    assert timer.sighting_cooldown == 0
    ok("Cooldown counts down on in-zone ticks with nothing tracked")

    fake.at(700)
    timer.on_entity_seen(boss)
    assert len(timer.on_tick()) == 8
    ok("Boss seen again ten minutes later alerts at once")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 5:  EVENT BUS WIRING
# ═══════════════════════════════════════════════════════════════════════

def test_bus_wiring():
    print("\n=== 5: EventBus wiring ===")
    bus = EventBus()
    timer, fake = _make()
    timer.register(bus)

    bus.emit(_kill())
    bus.emit(_kill(name="Goblin"))
    assert bus.drain() == 2
    assert len(timer.registry) == 1
    ok("EntityDied routed through the bus")

    fake.at(121)
    bus.emit(ClientTick())
    bus.drain()
    assert len(timer.drain_cues()) == 8
    ok("ClientTick routed through the bus")

    bus.emit(WorldLoad())
    bus.drain()
    assert len(timer.registry) == 0
    assert bus.stats() == {"EntityDied": 2, "ClientTick": 1, "WorldLoad": 1}
    ok("WorldLoad routed through the bus")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Death Validation", test_death_validation),
        ("Gates", test_gates_read_fresh),
        ("Tick And Drain", test_tick_and_drain),
        ("Sound Queue Hand-off", test_tick_to_sound_queue),
        ("Tick Gating", test_tick_gated),
        ("World Load", test_world_load_resets),
        ("Sighting Alert", test_sighting_alert),
        ("Sighting Cooldown Idle", test_sighting_cooldown_runs_while_idle),
        ("Bus Wiring", test_bus_wiring),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            fail(name, traceback.format_exc())

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Corleone Timer Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
