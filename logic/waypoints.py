"""logic/waypoints.py — Named Crystal Hollows waypoints and the ``/sthw`` command.

Two kinds of named location share one namespace:

* **Presets** — the fixed landmarks of the Hollows map.  They start
  unset and are filled in by the player (``/sthw set internal_city``).
  Their coordinates are stored map-relative: the Hollows occupy world
  x/z 200..824, so a preset keeps ``x - 200`` / ``z - 200`` clamped to
  the 0..624 map square.
* **User waypoints** — anything else, stored as absolute block
  positions in a plain dict.

``WaypointCommand.process(args, player_pos)`` returns chat lines; it
never raises on bad input.
"""

from __future__ import annotations
from dataclasses import dataclass
import re

from components import BlockPos


MAP_ORIGIN = 200
MAP_SIZE = 624

PREFIX = "[Hollow Tracker]"
SUCCESS_PREFIX = "[Hollow Tracker] ✔"
FAIL_PREFIX = "[Hollow Tracker] ✘"


# ═══════════════════════════════════════════════════════════════════
#  Presets
# ═══════════════════════════════════════════════════════════════════

@dataclass
class HollowsLocation:
    """One landmark on the Hollows map, unset until the player marks it."""
    id: str
    display_name: str
    loc_x: float | None = None
    loc_y: float | None = None
    loc_z: float | None = None

    def exists(self) -> bool:
        return None not in (self.loc_x, self.loc_y, self.loc_z)

    def set_world(self, x: float, y: float, z: float) -> None:
        self.loc_x = _clamp(x - MAP_ORIGIN, 0.0, float(MAP_SIZE))
        self.loc_y = y
        self.loc_z = _clamp(z - MAP_ORIGIN, 0.0, float(MAP_SIZE))

    def world_pos(self) -> BlockPos | None:
        if not self.exists():
            return None
        return BlockPos.of(self.loc_x + MAP_ORIGIN, self.loc_y, self.loc_z + MAP_ORIGIN)

    def map_pos(self) -> BlockPos | None:
        """Coordinates relative to the map corner, as the player copies them."""
        if not self.exists():
            return None
        return BlockPos.of(self.loc_x, self.loc_y, self.loc_z)

    def reset(self) -> None:
        self.loc_x = self.loc_y = self.loc_z = None


def default_locations() -> dict[str, HollowsLocation]:
    presets = [
        HollowsLocation("internal_city", "Lost Precursor City"),
        HollowsLocation("internal_temple", "Jungle Temple"),
        HollowsLocation("internal_den", "Goblin Queen's Den"),
        HollowsLocation("internal_mines", "Mines of Divan"),
        HollowsLocation("internal_bal", "Khazad-dûm"),
        HollowsLocation("internal_fairy", "Fairy Grotto"),
        HollowsLocation("internal_king", "King Yolkar"),
        HollowsLocation("internal_corleone", "Corleone"),
    ]
    return {p.id: p for p in presets}


# Diamond veins of the Mines of Divan, relative to the room's centre
DIAMOND_VEINS: dict[str, tuple[int, int, int]] = {
    "DV-1": (19, 29, 22),
    "DV-2": (34, 48, -35),
    "DV-3": (-3, 67, 22),
    "DV-4": (-31, 51, 40),
    "DV-5": (-17, 41, 42),
    "DV-6": (-19, -38, -17),
    "DV-7": (-13, -38, -24),
    "DV-8": (-14, -35, -40),
    "DV-9": (-10, -36, -48),
    "DV-10": (-22, -38, -38),
    "DV-11": (-28, -37, -43),
    "DV-12": (-31, -37, -38),
    "DV-13": (-41, -38, -43),
    "DV-14": (-47, -35, -37),
    "DV-15": (-45, -35, -29),
    "DV-16": (-42, -35, -19),
    "DV-17": (-28, -35, -9),
    "DV-18": (-25, -22, -3),
    "DV-19": (-34, -22, -3),
    "DV-20": (-34, -22, 3),
    "DV-21": (-25, -22, 3),
    "DV-22": (-16, -38, 0),
    "DV-23": (-27, -36, 19),
    "DV-24": (-37, -37, 22),
    "DV-25": (-44, -35, 28),
    "DV-26": (-43, -34, 32),
    "DV-27": (-29, -37, 35),
    "DV-28": (22, -34, 47),
    "DV-29": (32, -35, 36),
    "DV-30": (29, -35, 28),
    "DV-31": (40, -35, 22),
    "DV-32": (22, -38, 17),
    "DV-33": (32, -34, -15),
    "DV-34": (38, -28, -15),
    "DV-35": (42, -35, -13),
    "DV-36": (37, -38, -31),
    "DV-37": (46, -34, -38),
    "DV-38": (31, -35, -45),
    "DV-39": (21, -32, -45),
    "DV-40": (20, -38, -41),
    "DV-41": (17, -38, -29),
    "DV-42": (10, -38, -26),
}


# ═══════════════════════════════════════════════════════════════════
#  Store
# ═══════════════════════════════════════════════════════════════════

class WaypointStore:
    """Keyed map of user waypoints plus the preset landmarks."""

    def __init__(self):
        self.locations = default_locations()
        self._waypoints: dict[str, BlockPos] = {}

    # ── User waypoint map ────────────────────────────────────────────

    def set(self, name: str, pos: BlockPos) -> None:
        self._waypoints[name] = pos

    def remove(self, name: str) -> bool:
        return self._waypoints.pop(name, None) is not None

    def clear(self) -> None:
        self._waypoints.clear()

    def list(self) -> list[tuple[str, BlockPos]]:
        return list(self._waypoints.items())

    def get(self, name: str) -> BlockPos | None:
        return self._waypoints.get(name)

    def __len__(self) -> int:
        return len(self._waypoints)

    # ── Presets ──────────────────────────────────────────────────────

    def set_location(self, name: str, x: float, y: float, z: float) -> bool:
        """Set a preset if *name* is one.  Returns False for unknown ids."""
        loc = self.locations.get(name)
        if loc is None:
            return False
        loc.set_world(x, y, z)
        return True

    def reset_location(self, name: str) -> bool:
        loc = self.locations.get(name)
        if loc is None:
            return False
        loc.reset()
        return True

    def clear_all(self) -> None:
        for loc in self.locations.values():
            loc.reset()
        self.clear()

    def markers(self) -> list[tuple[str, BlockPos]]:
        """Everything worth drawing: set presets first, then user waypoints."""
        out = [(loc.display_name, loc.world_pos())
               for loc in self.locations.values() if loc.exists()]
        return out + self.list()


# ═══════════════════════════════════════════════════════════════════
#  /sthw command
# ═══════════════════════════════════════════════════════════════════

_SYNTAX = re.compile(
    r"^(?:(?:(?P<x>-?\d+(?:\.\d+)?) (?P<y>-?\d+(?:\.\d+)?) (?P<z>-?\d+(?:\.\d+)?) (?P<name>.+))"
    r"|(?P<nameonly>.+))$"
)

HELP_LINES = [
    f"{PREFIX} /sthw ➔ Shows all waypoints",
    "/sthw set name ➔ Sets waypoint at current location",
    "/sthw set x y z name ➔ Sets waypoint at specified location",
    "/sthw remove name ➔ Remove the specified waypoint",
    "/sthw clear ➔ Removes all waypoints",
    "/sthw divan_diamonds ➔ Marks every diamond vein around you",
]


class WaypointCommand:
    """``/skytilshollowwaypoint`` (alias ``/sthw``)."""

    name = "skytilshollowwaypoint"
    aliases = ("sthw",)
    usage = "/sthw x y z location"

    def __init__(self, store: WaypointStore):
        self.store = store

    def process(self, args: list[str],
                player_pos: tuple[float, float, float]) -> list[str]:
        if not args:
            return self._list()

        sub, rest = args[0], " ".join(args[1:])
        if sub in ("set", "add"):
            return self._set(rest, player_pos)
        if sub in ("remove", "delete"):
            return self._remove(rest)
        if sub == "clear":
            self.store.clear_all()
            return [f"{SUCCESS_PREFIX} Successfully cleared all waypoints."]
        if sub == "divan_diamonds":
            origin = BlockPos.of(*player_pos)
            for key, (dx, dy, dz) in DIAMOND_VEINS.items():
                self.store.set(key, BlockPos(dx, dy, dz).add(origin))
            return [f"{SUCCESS_PREFIX} Added {len(DIAMOND_VEINS)} diamond vein waypoints."]
        return list(HELP_LINES)

    # ── Subcommands ──────────────────────────────────────────────────

    def _list(self) -> list[str]:
        lines = [f"{PREFIX} Waypoints:"]
        for loc in self.store.locations.values():
            if not loc.exists():
                continue
            lines.append(f"{loc.display_name} [Copy: {loc.display_name}: {loc.map_pos()}]"
                         f" [Remove: /sthw remove {loc.id}]")
        for key, pos in self.store.list():
            lines.append(f"{key} [Copy: {key}: {pos}] [Remove: /sthw remove {key}]")
        lines.append("For more info do /sthw help")
        return lines

    def _set(self, rest: str, player_pos: tuple[float, float, float]) -> list[str]:
        match = _SYNTAX.match(rest)
        if match is None:
            return [f"{FAIL_PREFIX} /sthw set <x y z> <name>"]

        if match.group("nameonly") is not None:
            name = match.group("nameonly")
            x, y, z = player_pos
        else:
            name = match.group("name")
            x, y, z = (float(match.group(k)) for k in ("x", "y", "z"))

        if not self.store.set_location(name, x, y, z):
            self.store.set(name, BlockPos.of(x, y, z))
        print(f"[WAYPOINT] {name} → {x:.1f} {y:.1f} {z:.1f}")
        return [f"{SUCCESS_PREFIX} Successfully created waypoint {name}"]

    def _remove(self, name: str) -> list[str]:
        if not name:
            return [f"{PREFIX} /sthw remove <name>"]
        if self.store.reset_location(name) or self.store.remove(name):
            return [f"{SUCCESS_PREFIX} Successfully removed waypoint {name}!"]
        return [f"{FAIL_PREFIX} Waypoint {name} does not exist"]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))
