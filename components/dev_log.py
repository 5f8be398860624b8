"""components.dev_log — Structured tracker event log.

A ring-buffer resource that records timestamped decisions taken by the
tracker: clusters created or merged, expiries, notification bursts.
Read by the viewer to give a live feed of why a label appeared or
disappeared.

Usage:
    log = DevLog()
    log.record("cluster", "merged #2", t=now, details={"pos": "7 0 0"})

Each entry is a dict:
    {"t": float, "cat": str, "msg": str, "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of tracker events for the viewer."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 200
    _paused: bool = False

    # If non-empty, only entries whose ``cat`` is in the set are kept.
    cat_filter: set[str] = field(default_factory=set)

    def record(self, cat: str, msg: str, *, t: float = 0.0,
               details: dict | None = None) -> None:
        if self._paused:
            return
        if self.cat_filter and cat not in self.cat_filter:
            return
        self.entries.append({
            "t": t,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def clear(self):
        self.entries.clear()

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def recent(self, n: int = 20) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]
