"""
main.py — Bootstrap

1. Load tuning values
2. Create the host-state resources (feature flag, location, mayor)
3. Build the Corleone timer and wire it to the event bus
4. Push the viewer scene
5. Run
"""

from core import tuning
from core.app import App
from core.clock import Clock
from core.constants import CRYSTAL_HOLLOWS_MODE
from core.events import EventBus
from components import DevLog, LocationInfo
from logic.corleone_timer import CorleoneTimer
from logic.waypoints import WaypointCommand, WaypointStore
from scenes.tracker_scene import TrackerScene


def main():
    tuning.load()

    app = App(title="Hollow Tracker", width=960, height=640)

    # -- Host state --
    # The viewer starts "inside" the Hollows so clicks are tracked at once.
    location = LocationInfo(in_skyblock=True, mode=CRYSTAL_HOLLOWS_MODE)
    dev_log = DevLog()

    # -- Feature --
    bus = EventBus()
    timer = CorleoneTimer(clock=Clock(), location=location, dev_log=dev_log)
    timer.register(bus)

    waypoints = WaypointCommand(WaypointStore())

    print(f"[MAIN] Tracking '{timer.boss_name}' "
          f"(window {timer.registry.min_delay}-{timer.registry.max_delay}s, "
          f"expiry {timer.registry.expiry}s)")

    # -- Start --
    app.push_scene(TrackerScene(timer, bus, waypoints, location, dev_log))
    app.run()


if __name__ == "__main__":
    main()
