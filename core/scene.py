"""
core/scene.py — Scene interface

The viewer holds a stack of scenes; only the top one gets
update/draw calls.

Frames arrive at whatever rate pygame manages, but the tracker lives on
the host's fixed tick clock.  ``FixedStepScene`` turns frame ``dt`` into
whole ticks::

    class MyScene(FixedStepScene):
        def step(self, app):
            bus.emit(ClientTick())      # exactly 20 times per second
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import TICKS_PER_SECOND

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Process a single pygame event."""
        pass

    def update(self, dt: float, app: App):
        """Advance by one frame. dt is seconds."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
        pass


class FixedStepScene(Scene):
    """Scene that advances in host ticks rather than frames."""

    # A stalled frame (window drag, breakpoint) must not replay minutes of ticks
    MAX_STEPS_PER_FRAME = 10

    def __init__(self, tick_rate: int = TICKS_PER_SECOND):
        self.tick_dt = 1.0 / tick_rate
        self._accum = 0.0
        self.steps = 0

    def update(self, dt: float, app: App):
        self._accum += dt
        n = 0
        while self._accum >= self.tick_dt and n < self.MAX_STEPS_PER_FRAME:
            self._accum -= self.tick_dt
            self.step(app)
            self.steps += 1
            n += 1
        if n == self.MAX_STEPS_PER_FRAME:
            self._accum = 0.0

    def step(self, app: App):
        """One host tick."""
        pass
