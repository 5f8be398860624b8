"""logic/spawn_cluster.py — One tracked boss spawn point.

A cluster stores timestamps, never a "current state": the state is
recomputed from ``(now, window_start, window_end)`` on every query.

    DEAD        window_start >  now
    SPAWNING    window_start <= now < window_end
    OVERDUE     window_end   <= now

There is no fourth "expired" state.  Forgetting a cluster is the
registry's job (see ``ClusterRegistry.tick``).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from components import BlockPos
from core.constants import MIN_SPAWN_DELAY, MAX_SPAWN_DELAY, NOTIFY_COOLDOWN_TICKS


class SpawnState(Enum):
    DEAD = "dead"
    SPAWNING = "spawning"
    OVERDUE = "overdue"


@dataclass
class SpawnCluster:
    position: BlockPos
    last_observed_at: int = 0
    window_start: int = 0
    window_end: int = 0
    cooldown_ticks: int = 0
    observations: int = 0

    # Copied from the registry so every cluster can be reasoned about alone
    min_delay: int = MIN_SPAWN_DELAY
    max_delay: int = MAX_SPAWN_DELAY
    cooldown_reset: int = NOTIFY_COOLDOWN_TICKS

    def refresh(self, now: int) -> None:
        """A kill was confirmed here: restart the respawn countdown."""
        self.last_observed_at = now
        self.window_start = now + self.min_delay
        self.window_end = now + self.max_delay
        self.observations += 1

    def state(self, now: int) -> SpawnState:
        if self.window_start > now:
            return SpawnState.DEAD
        if self.window_end > now:
            return SpawnState.SPAWNING
        return SpawnState.OVERDUE

    def matches(self, pos: BlockPos, max_distance_sq: int) -> bool:
        return self.position.distance_sq(pos) <= max_distance_sq

    def merge(self, pos: BlockPos, now: int) -> None:
        """Pull the estimate halfway toward *pos* and restart the window."""
        self.position = self.position.midpoint(pos)
        self.refresh(now)

    def should_notify(self, now: int) -> bool:
        """Called once per tick.  True at most once per cooldown period,
        and only while overdue."""
        if self.state(now) is SpawnState.OVERDUE and self.cooldown_ticks <= 0:
            self.cooldown_ticks = self.cooldown_reset
            return True
        self.cooldown_ticks -= 1
        return False

    def remaining(self, now: int) -> int:
        """Seconds shown on the label for the current state.

        Counts down to the window opening while DEAD, to the window
        closing while SPAWNING, and up from the window end once OVERDUE.
        """
        state = self.state(now)
        if state is SpawnState.DEAD:
            return self.window_start - now
        if state is SpawnState.SPAWNING:
            return self.window_end - now
        return now - self.window_end
