"""test_core.py — Clock adapter, tuning overrides, event bus, block maths.

Run: python test_core.py
"""
from __future__ import annotations
import sys, tempfile, traceback
from pathlib import Path

from components import BlockPos, DevLog
from core import tuning
from core.clock import Clock
from core.constants import SECOND_IN_NS
from core.events import EventBus, EntityDied, ClientTick
from logic.cluster_registry import ClusterRegistry


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


# ═══════════════════════════════════════════════════════════════════════
#  TESTS
# ═══════════════════════════════════════════════════════════════════════

def test_clock_adapter():
    print("\n=== 1: Clock adapter ===")
    ns = [0]
    clock = Clock(ns_source=lambda: ns[0])
    assert clock.now() == 0
    ns[0] = 70 * SECOND_IN_NS + SECOND_IN_NS // 2
    assert clock.now() == 70
    ok("Nanoseconds → whole seconds (truncated)")

    assert clock.advance_tick() == 1
    assert clock.advance_tick() == 2
    assert clock.ticks_to_seconds(400) == 20.0
    assert clock.seconds_to_ticks(2.5) == 50
    ok("Tick counter and tick ↔ second conversion at 20 Hz")

    real = Clock()
    assert real.now() >= 0
    ok("Defaults to the monotonic clock")


def test_tuning_overrides():
    print("\n=== 2: Tuning overrides ===")
    try:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "tuning.toml"
            path.write_text(
                "[timer]\n"
                "min_spawn_delay = 30\n"
                "max_spawn_delay = 90\n"
                "merge_distance_sq = 100\n"
                "[sound]\n"
                "burst_sound = \"note.pling\"\n",
                encoding="utf-8",
            )
            tuning.load(path)

            assert tuning.get("timer", "min_spawn_delay", 60) == 30
            assert tuning.get("timer", "expiry", 240) == 240
            assert tuning.get("no.such", "key", "d") == "d"
            assert tuning.section("sound") == {"burst_sound": "note.pling"}
            ok("get() / section() read the file with defaults for gaps")

            reg = ClusterRegistry()
            assert (reg.min_delay, reg.max_delay, reg.expiry) == (30, 90, 240)
            assert reg.merge_distance_sq == 100
            assert reg.sound_id == "note.pling"
            ok("Registry picks tuned constants up at construction")

            reg = ClusterRegistry(min_delay=5)
            assert reg.min_delay == 5
            ok("Explicit arguments beat the tuning file")

            path.write_text("[timer]\nexpiry = 600\n", encoding="utf-8")
            assert ClusterRegistry().expiry == 240
            tuning.reload()
            assert tuning.get("timer", "min_spawn_delay", 60) == 60
            assert ClusterRegistry().expiry == 600
            ok("reload() re-reads the same file; rebuilt registries see the edit")
    finally:
        tuning.clear()

    tuning.load(Path(tempfile.gettempdir()) / "definitely-missing-tuning.toml")
    assert tuning.get("timer", "expiry", 240) == 240
    ok("Missing tuning file falls back to defaults")

    tuning.load()
    assert tuning.get("boss", "name") == "Team Treasurite"
    tuning.clear()
    ok("Shipped data/tuning.toml parses")


def test_event_bus():
    print("\n=== 3: Event bus ===")
    bus = EventBus()
    seen: list[str] = []

    def boom(ev):
        raise RuntimeError("handler exploded")

    bus.subscribe("EntityDied", boom)
    bus.subscribe("EntityDied", lambda ev: seen.append(ev.name))
    bus.emit(EntityDied(name="a"))
    bus.emit(EntityDied(name="b"))
    assert bus.pending_count() == 2
    assert bus.drain() == 2
    assert seen == ["a", "b"]
    ok("A failing handler does not stop the others")

    def chain(ev):
        seen.append("tick")
        if len(seen) < 5:
            bus.emit(ClientTick())

    bus.subscribe("ClientTick", chain)
    bus.emit(ClientTick())
    bus.drain()
    assert seen[2:] == ["tick", "tick", "tick"]
    ok("Events emitted while draining run in the same drain")

    assert bus.unsubscribe("EntityDied", boom)
    assert not bus.unsubscribe("EntityDied", boom)
    bus.emit(EntityDied(name="c"))
    bus.clear()
    assert bus.drain() == 0
    ok("unsubscribe() and clear()")


def test_block_pos():
    print("\n=== 4: BlockPos ===")
    assert BlockPos.of(-0.5, 63.999, 10.0) == BlockPos(-1, 63, 10)
    ok("of() floors, including negatives")

    a, b = BlockPos(0, 0, 0), BlockPos(15, -4, 3)
    assert a.distance_sq(b) == 225 + 16 + 9
    assert a.midpoint(b) == BlockPos(7, -2, 1)
    assert BlockPos(-3, -3, -3).midpoint(BlockPos(0, 0, 0)) == BlockPos(-1, -1, -1)
    assert b.center() == (15.5, -3.5, 3.5)
    assert str(b) == "15 -4 3"
    ok("distance_sq / midpoint / center / str")


def test_dev_log():
    print("\n=== 5: DevLog ===")
    log = DevLog(max_entries=3)
    for i in range(5):
        log.record("cluster", f"m{i}", t=i)
    assert [e["msg"] for e in log.entries] == ["m2", "m3", "m4"]
    ok("Ring buffer keeps the newest entries")

    log.pause()
    log.record("cluster", "hidden")
    log.resume()
    log.cat_filter = {"expire"}
    log.record("cluster", "filtered")
    log.record("expire", "kept", t=9)
    assert log.recent(1)[0]["msg"] == "kept"
    assert len(log.for_cat("cluster")) == 2
    ok("pause / category filter")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Clock Adapter", test_clock_adapter),
        ("Tuning Overrides", test_tuning_overrides),
        ("Event Bus", test_event_bus),
        ("BlockPos", test_block_pos),
        ("DevLog", test_dev_log),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            fail(name, traceback.format_exc())

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Core Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
