"""components.resources — Host-owned state the tracker polls.

These are mutable singletons owned by the host (or the viewer).  The
tracker keeps a reference and reads them fresh on every call, so
flipping a flag takes effect on the very next event.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from core.constants import BOSS_HEALTH_VALUES, CRYSTAL_HOLLOWS_MODE


@dataclass
class FeatureConfig:
    """User toggles.  Only the Corleone timer lives here for now."""
    corleone_timer: bool = True


@dataclass
class LocationInfo:
    """Where the player currently is.

    ``in_skyblock`` is the coarse server check, ``mode`` the island id
    reported by the scoreboard / location packet.
    """
    in_skyblock: bool = False
    mode: str = ""

    def in_crystal_hollows(self) -> bool:
        return self.in_skyblock and self.mode == CRYSTAL_HOLLOWS_MODE


@dataclass
class MayorInfo:
    """Difficulty signal from the active mayor.

    The boss's max health is one of a small set of values depending on
    the current perks.  A host that tracks mayors can narrow or replace
    ``health_values``; the default accepts every known tier.
    """
    name: str = ""
    health_values: tuple[float, ...] = field(default=BOSS_HEALTH_VALUES)

    def expected_health_values(self) -> set[float]:
        return set(self.health_values)
