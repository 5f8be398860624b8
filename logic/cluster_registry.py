"""logic/cluster_registry.py — Owns every tracked spawn point.

Three entry points mutate the set, all called from the host's event
thread:

* ``observe(pos, now)``  — a confirmed boss kill at *pos*
* ``tick(now)``          — once per host tick; expires and notifies
* ``reset(now)``         — world change; nothing survives it

``snapshot(now)`` is the read-only side for the renderer.

Matching is a first-found linear scan in insertion order.  A new kill
within ``merge_distance_sq`` of an existing cluster is folded into it
(the same boss reports slightly different coordinates between its
model origin and where it fell); anything further away starts a new
cluster.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from components import BlockPos, DevLog
from core import tuning
from core.constants import (
    MIN_SPAWN_DELAY, MAX_SPAWN_DELAY, EXPIRY, MERGE_DISTANCE_SQ,
    NOTIFY_COOLDOWN_TICKS, BURST_SOUND, LABEL_COLORS,
)
from logic.notifications import Cue, make_burst
from logic.spawn_cluster import SpawnCluster, SpawnState


class ColorClass(Enum):
    WAITING = "waiting"
    IMMINENT = "imminent"
    OVERDUE = "overdue"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return LABEL_COLORS[self.value]


_STATE_COLORS = {
    SpawnState.DEAD: ColorClass.WAITING,
    SpawnState.SPAWNING: ColorClass.IMMINENT,
    SpawnState.OVERDUE: ColorClass.OVERDUE,
}


def label_for(state: SpawnState, remaining: int) -> str:
    if state is SpawnState.DEAD:
        return f"Waiting for spawn... {remaining}s"
    if state is SpawnState.SPAWNING:
        return f"Corleone is spawning... {remaining}s"
    return f"Corleone is overdue... {remaining}s"


@dataclass(frozen=True)
class ClusterView:
    """Immutable copy of one cluster for a render pass."""
    position: BlockPos
    anchor: tuple[float, float, float]
    label: str
    color_class: ColorClass
    state: SpawnState
    last_observed_at: int


class ClusterRegistry:
    """Tracked spawn points, oldest first."""

    def __init__(self, *, min_delay: int | None = None,
                 max_delay: int | None = None,
                 expiry: int | None = None,
                 merge_distance_sq: int | None = None,
                 cooldown_ticks: int | None = None,
                 sound_id: str | None = None,
                 dev_log: DevLog | None = None):
        def _pick(value, key, default, section="timer"):
            return value if value is not None else tuning.get(section, key, default)

        self.min_delay = int(_pick(min_delay, "min_spawn_delay", MIN_SPAWN_DELAY))
        self.max_delay = int(_pick(max_delay, "max_spawn_delay", MAX_SPAWN_DELAY))
        self.expiry = int(_pick(expiry, "expiry", EXPIRY))
        self.merge_distance_sq = int(_pick(merge_distance_sq, "merge_distance_sq",
                                           MERGE_DISTANCE_SQ))
        self.cooldown_ticks = int(_pick(cooldown_ticks, "notify_cooldown_ticks",
                                        NOTIFY_COOLDOWN_TICKS))
        self.sound_id = str(_pick(sound_id, "burst_sound", BURST_SOUND, "sound"))
        self.dev_log = dev_log
        self._clusters: list[SpawnCluster] = []

    # ── Mutation ─────────────────────────────────────────────────────

    def observe(self, pos: BlockPos, now: int) -> SpawnCluster:
        """Fold a confirmed kill at *pos* into the first nearby cluster,
        or start tracking a new one.  Returns the cluster touched."""
        for index, cluster in enumerate(self._clusters):
            if cluster.matches(pos, self.merge_distance_sq):
                cluster.merge(pos, now)
                self._log("cluster", f"merged #{index} → {cluster.position}", now,
                          {"kill": str(pos), "observations": cluster.observations})
                return cluster

        cluster = SpawnCluster(
            position=pos,
            min_delay=self.min_delay,
            max_delay=self.max_delay,
            cooldown_reset=self.cooldown_ticks,
        )
        cluster.refresh(now)
        self._clusters.append(cluster)
        self._log("cluster", f"new #{len(self._clusters) - 1} at {pos}", now)
        return cluster

    def tick(self, now: int) -> list[Cue]:
        """Drop stale clusters, then collect alert bursts for overdue ones."""
        self.expire(now)

        cues: list[Cue] = []
        for cluster in self._clusters:
            if cluster.should_notify(now):
                cues.extend(make_burst(self.sound_id))
                self._log("notify", f"overdue at {cluster.position}", now,
                          {"overdue_by": cluster.remaining(now)})
        return cues

    def expire(self, now: int) -> int:
        """Remove clusters not confirmed for longer than ``expiry``.
        Returns how many were removed."""
        keep: list[SpawnCluster] = []
        for cluster in self._clusters:
            if cluster.last_observed_at + self.expiry < now:
                self._log("expire", f"forgot {cluster.position}", now,
                          {"last_observed_at": cluster.last_observed_at})
            else:
                keep.append(cluster)
        removed = len(self._clusters) - len(keep)
        self._clusters = keep
        return removed

    def reset(self, now: int = 0) -> None:
        """Forget every cluster.  *now* only timestamps the DevLog entry."""
        if self._clusters:
            self._log("cluster", f"reset ({len(self._clusters)} dropped)", now)
        self._clusters.clear()

    # ── Queries ──────────────────────────────────────────────────────

    def snapshot(self, now: int) -> list[ClusterView]:
        views: list[ClusterView] = []
        for cluster in self._clusters:
            state = cluster.state(now)
            views.append(ClusterView(
                position=cluster.position,
                anchor=cluster.position.center(),
                label=label_for(state, cluster.remaining(now)),
                color_class=_STATE_COLORS[state],
                state=state,
                last_observed_at=cluster.last_observed_at,
            ))
        return views

    def __len__(self) -> int:
        return len(self._clusters)

    def __bool__(self) -> bool:
        return bool(self._clusters)

    def __repr__(self) -> str:
        return f"ClusterRegistry(clusters={len(self._clusters)})"

    # ── Internal ─────────────────────────────────────────────────────

    def _log(self, cat: str, msg: str, now: int, details: dict | None = None) -> None:
        if self.dev_log is not None:
            self.dev_log.record(cat, msg, t=now, details=details)
