"""
scenes/tracker_scene.py — Live viewer for the Corleone timer

Stands in for the game client: draws a top-down (x/z) view of the
Crystal Hollows with every tracked spawn point and waypoint, and lets
you fake the host's event feed from the keyboard.

Controls:
  Left click  = boss killed at the cursor
  S           = boss sighted (alive) this frame
  W           = drop a waypoint at the cursor
  D           = mark the Divan diamond veins around the cursor
  C           = clear all waypoints
  R           = world load (drops every spawn point)
  F           = toggle the feature flag
  Z           = toggle "in Crystal Hollows"
  Escape      = quit
"""

from __future__ import annotations
import pygame

from components import DevLog, LocationInfo
from core.app import App
from core.constants import CRYSTAL_HOLLOWS_MODE, WAYPOINT_COLOR
from core.events import EventBus, EntityDied, EntitySeen, ClientTick, WorldLoad
from core.scene import FixedStepScene
from logic.corleone_timer import CorleoneTimer
from logic.notifications import Cue, SoundQueue
from logic.waypoints import WaypointCommand, MAP_ORIGIN, MAP_SIZE

# ── UI constants ─────────────────────────────────────────────────────
_BG = (16, 20, 24)
_MAP_BG = (28, 24, 34)
_BORDER = (70, 60, 90)
_TEXT = (200, 200, 200)
_DIM = (110, 110, 110)
_FLASH = (255, 230, 120)

_MAP_LEFT = 12
_MAP_TOP = 28
_MAP_BOTTOM = 12
_SIDEBAR_W = 320
_GROUND_Y = 64.0     # height a click is reported at
_FLASH_TICKS = 4

_CAT_COLORS: dict[str, tuple[int, int, int]] = {
    "cluster": (120, 200, 255),
    "expire":  (180, 180, 180),
    "notify":  (255, 200, 80),
}


class TrackerScene(FixedStepScene):
    def __init__(self, timer: CorleoneTimer, bus: EventBus,
                 waypoints: WaypointCommand, location: LocationInfo,
                 dev_log: DevLog | None = None):
        super().__init__()
        self.timer = timer
        self.bus = bus
        self.waypoints = waypoints
        self.location = location
        self.dev_log = dev_log
        self.sound_queue = SoundQueue(player=self._play)
        self.timer.sound_queue = self.sound_queue
        self._flash = 0
        self._last_cue: Cue | None = None
        self._messages: list[str] = []
        self._wp_counter = 0
        self.map_px = 600

    def on_enter(self, app: App):
        w, h = app.size
        self.map_px = min(h - _MAP_TOP - _MAP_BOTTOM, w - _MAP_LEFT - _SIDEBAR_W)

    # ── Coordinates ──────────────────────────────────────────────────

    def _to_screen(self, x: float, z: float) -> tuple[int, int]:
        sx = _MAP_LEFT + (x - MAP_ORIGIN) * self.map_px / MAP_SIZE
        sy = _MAP_TOP + (z - MAP_ORIGIN) * self.map_px / MAP_SIZE
        return int(sx), int(sy)

    def _to_world(self, sx: int, sy: int) -> tuple[float, float, float]:
        x = MAP_ORIGIN + (sx - _MAP_LEFT) * MAP_SIZE / self.map_px
        z = MAP_ORIGIN + (sy - _MAP_TOP) * MAP_SIZE / self.map_px
        return x, _GROUND_Y, z

    # ── Input ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            x, y, z = self._to_world(*app.mouse_pos())
            self.bus.emit(EntityDied(name=self.timer.boss_name,
                                     max_health=min(self.timer.mayor.expected_health_values()),
                                     x=x, y=y, z=z, kind=self.timer.boss_kind))
            return
        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_ESCAPE:
            app.running = False
        elif event.key == pygame.K_s:
            self.bus.emit(EntitySeen(name=self.timer.boss_name,
                                     max_health=min(self.timer.mayor.expected_health_values()),
                                     kind=self.timer.boss_kind))
        elif event.key == pygame.K_w:
            self._wp_counter += 1
            x, y, z = self._to_world(*app.mouse_pos())
            self._say(self.waypoints.process(
                ["set", f"{x:.0f}", f"{y:.0f}", f"{z:.0f}", f"wp{self._wp_counter}"],
                (x, y, z)))
        elif event.key == pygame.K_d:
            self._say(self.waypoints.process(["divan_diamonds"],
                                             self._to_world(*app.mouse_pos())))
        elif event.key == pygame.K_c:
            self._say(self.waypoints.process(["clear"], (0.0, 0.0, 0.0)))
        elif event.key == pygame.K_r:
            self.bus.emit(WorldLoad(mode=self.location.mode))
        elif event.key == pygame.K_f:
            cfg = self.timer.config
            cfg.corleone_timer = not cfg.corleone_timer
        elif event.key == pygame.K_z:
            in_zone = self.location.in_crystal_hollows()
            self.location.in_skyblock = True
            self.location.mode = "" if in_zone else CRYSTAL_HOLLOWS_MODE

    # ── Tick ─────────────────────────────────────────────────────────

    def step(self, app: App):
        self.bus.emit(ClientTick())
        self.bus.drain()
        self.sound_queue.tick()
        if self._flash > 0:
            self._flash -= 1

    def _play(self, cue: Cue) -> None:
        self._last_cue = cue
        self._flash = _FLASH_TICKS

    def _say(self, lines: list[str]) -> None:
        self._messages = (self._messages + lines)[-6:]

    # ── Draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(_BG)
        map_rect = pygame.Rect(_MAP_LEFT, _MAP_TOP, self.map_px, self.map_px)
        pygame.draw.rect(surface, _MAP_BG, map_rect)
        pygame.draw.rect(surface, _BORDER, map_rect, 1)

        cfg = self.timer.config
        status = (f"feature={'on' if cfg.corleone_timer else 'off'}  "
                  f"hollows={'yes' if self.location.in_crystal_hollows() else 'no'}  "
                  f"tracked={len(self.timer.registry)}  "
                  f"queued={self.sound_queue.pending()}")
        app.draw_text(surface, status, _MAP_LEFT, 6, _TEXT)

        for name, pos in self.waypoints.store.markers():
            sx, sy = self._to_screen(pos.x + 0.5, pos.z + 0.5)
            pygame.draw.circle(surface, WAYPOINT_COLOR, (sx, sy), 3)
            app.draw_text(surface, name, sx + 5, sy - 6, WAYPOINT_COLOR, app.font_sm)

        for view in self.timer.snapshot():
            ax, _ay, az = view.anchor
            sx, sy = self._to_screen(ax, az)
            color = view.color_class.rgb
            pygame.draw.circle(surface, color, (sx, sy), 6, 2)
            app.draw_text_bg(surface, view.label, sx + 9, sy - 7, color)

        mx, my = app.mouse_pos()
        if map_rect.collidepoint(mx, my):
            wx, _wy, wz = self._to_world(mx, my)
            app.draw_text(surface, f"x={wx:.0f} z={wz:.0f}", mx + 12, my + 12,
                          _DIM, app.font_sm)

        self._draw_sidebar(surface, app)

        if self._flash > 0 and self._last_cue is not None:
            app.draw_text_bg(surface, f"♪ {self._last_cue.sound_id} "
                                      f"{self._last_cue.volume:.2f}",
                             _MAP_LEFT + 8, _MAP_TOP + self.map_px - 24, _FLASH,
                             font=app.font_lg)

    def _draw_sidebar(self, surface: pygame.Surface, app: App):
        px = _MAP_LEFT + self.map_px + 14
        y = _MAP_TOP
        app.draw_text(surface, "Chat", px, y, _TEXT, app.font_lg)
        y += 22
        for line in self._messages:
            app.draw_text(surface, line[:44], px, y, _DIM, app.font_sm)
            y += 13

        y += 12
        app.draw_text(surface, "Tracker log", px, y, _TEXT, app.font_lg)
        y += 22
        if self.dev_log is None:
            return
        for entry in reversed(self.dev_log.recent(24)):
            color = _CAT_COLORS.get(entry["cat"], _DIM)
            app.draw_text(surface, f"{entry['t']:>7}  {entry['msg']}"[:44], px, y,
                          color, app.font_sm)
            y += 13
