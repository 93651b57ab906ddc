"""
Fire - the avatar's projectile.
"""

from __future__ import annotations

from tilecore.core.entity import Entity


class Fire(Entity):
    """
    Straight-flying projectile with a fixed lifetime.

    A hit kills both the projectile and the entity it touches. Fire
    ignores tiles and burns out after `lifetime` seconds.
    """

    half_width = 8.0
    half_height = 8.0
    sheet_origin = (0, 0)

    def __init__(self, lifetime: float = 1.0):
        super().__init__()
        self.lifetime = lifetime
        self.age = 0.0

    def step(self, time_step: float) -> None:
        if not self.alive:
            return

        self.age += time_step
        if self.age >= self.lifetime:
            self.alive = False
            return

        self.integrate(time_step)

    def collide_entity(self, other: Entity) -> None:
        if not self.alive or not other.alive:
            return
        if self.overlaps(other):
            self.alive = False
            other.alive = False
