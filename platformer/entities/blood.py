"""
Blood - decorative particle.
"""

from __future__ import annotations

from tilecore.core.entity import Entity


class Blood(Entity):
    """Falls under gravity with drag and disappears after `lifetime` seconds."""

    half_width = 4.0
    half_height = 4.0
    sheet_origin = (16, 0)

    def __init__(self, lifetime: float = 0.8, gravity: float = 900.0, drag: float = 0.5):
        super().__init__()
        self.lifetime = lifetime
        self.gravity = gravity
        self.drag = drag
        self.age = 0.0

    def step(self, time_step: float) -> None:
        if not self.alive:
            return

        self.age += time_step
        if self.age >= self.lifetime:
            self.alive = False
            return

        self.dy += self.gravity * time_step
        factor = max(0.0, 1.0 - self.drag * time_step)
        self.dx *= factor
        self.dy *= factor
        self.integrate(time_step)
