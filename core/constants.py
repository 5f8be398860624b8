"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.
Every value here is a *default*; ``data/tuning.toml`` can override the
timer, boss and sound numbers at load time (see ``core.tuning``).

Unit System
-----------
Two clocks run side by side and must never be mixed:

    Prediction windows      s       (whole seconds from the monotonic clock)
    Notification cooldowns  ticks   (host simulation steps, 20 per second)
    Positions               blocks  (integer world coordinates)

Spawn Timing
~~~~~~~~~~~~
After a confirmed kill the boss respawns somewhere inside
``[MIN_SPAWN_DELAY, MAX_SPAWN_DELAY]`` seconds.  A spawn point that has
not been confirmed again for ``EXPIRY`` seconds is forgotten.

Merge Radius
~~~~~~~~~~~~
Two kills within ``sqrt(MERGE_DISTANCE_SQ)`` blocks of each other are
the same physical spawn point (model origin vs. death point jitter).
"""

# ── Clock conversion ────────────────────────────────────────────────
SECOND_IN_NS = 1_000_000_000
TICKS_PER_SECOND = 20

# ── Spawn timing (seconds) ──────────────────────────────────────────
MIN_SPAWN_DELAY = 60
MAX_SPAWN_DELAY = 120
EXPIRY = 240

# ── Spatial clustering ──────────────────────────────────────────────
MERGE_DISTANCE_SQ = 400    # 20 blocks

# ── Notifications (ticks) ───────────────────────────────────────────
NOTIFY_COOLDOWN_TICKS = 400
SIGHTING_COOLDOWN_TICKS = 400
SIGHTING_WINDOW = 1        # s a sighting stays "fresh"

BURST_SOUND = "random.orb"

# (volume, delay in ticks) — two phrases of four notes
BURST_PATTERN: tuple[tuple[float, int], ...] = (
    (1.05, 0),
    (1.05, 5),
    (1.05, 10),
    (0.85, 15),

    (0.95, 40),
    (0.95, 45),
    (0.95, 50),
    (0.80, 55),
)

# ── Boss signature ──────────────────────────────────────────────────
BOSS_NAME = "Team Treasurite"
BOSS_KIND = "other_player"
# Max health scales with the active mayor's difficulty perk
BOSS_HEALTH_VALUES: tuple[float, ...] = (
    1_000_000.0,
    2_000_000.0,
    4_000_000.0,
    8_000_000.0,
)

# ── Zone ────────────────────────────────────────────────────────────
CRYSTAL_HOLLOWS_MODE = "crystal_hollows"

# ── Render ──────────────────────────────────────────────────────────
LABEL_COLORS = {
    "waiting":  (85, 255, 85),     # green
    "imminent": (255, 255, 85),    # yellow
    "overdue":  (255, 85, 85),     # red
}

WAYPOINT_COLOR = (120, 170, 255)
