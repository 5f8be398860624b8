"""logic/notifications.py — Audio cues and the tick-delayed sound queue.

A *cue* is an instruction for the playback layer: which sound, how
loud, and how many ticks from now.  Alerts are never a single chime;
``make_burst()`` expands the configured pattern into a short phrase so
the alert is recognisable.

``SoundQueue`` holds cues until their delay has elapsed.  The host
calls ``tick()`` once per simulation step; anything due is handed to
the injected ``player`` callable in insertion order::

    queue = SoundQueue(player=lambda cue: mixer.play(cue.sound_id))
    queue.extend(make_burst())
    queue.tick()      # plays the delay-0 cue
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable

from core.constants import BURST_PATTERN, BURST_SOUND


@dataclass(frozen=True, slots=True)
class Cue:
    """One note of an alert."""
    sound_id: str
    volume: float
    delay_ticks: int = 0


def make_burst(sound_id: str = BURST_SOUND,
               pattern: Iterable[tuple[float, int]] = BURST_PATTERN) -> list[Cue]:
    """Return the ordered alert phrase for *sound_id*."""
    return [Cue(sound_id, volume, delay) for volume, delay in pattern]


@dataclass(slots=True)
class _Pending:
    cue: Cue
    remaining: int


class SoundQueue:
    """Cues waiting for their delay to run out.

    Playback itself is not our concern; without a ``player`` the queue
    only logs what it would play.
    """

    def __init__(self, player: Callable[[Cue], None] | None = None):
        self._pending: list[_Pending] = []
        self._player = player
        self.played = 0

    def add(self, cue: Cue) -> None:
        self._pending.append(_Pending(cue, cue.delay_ticks))

    def extend(self, cues: Iterable[Cue]) -> None:
        for cue in cues:
            self.add(cue)

    def tick(self) -> list[Cue]:
        """Advance one tick and play every cue that is now due.

        Returns the cues played this tick.
        """
        due: list[Cue] = []
        keep: list[_Pending] = []
        for p in self._pending:
            if p.remaining <= 0:
                due.append(p.cue)
            else:
                p.remaining -= 1
                keep.append(p)
        self._pending = keep

        for cue in due:
            if self._player is not None:
                self._player(cue)
            else:
                print(f"[SOUND] {cue.sound_id} vol={cue.volume:.2f}")
        self.played += len(due)
        return due

    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self._pending.clear()
