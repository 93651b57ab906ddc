"""
Enemy - a walker that chases the avatar.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING

from tilecore.core.config import PhysicsConfig
from tilecore.core.entity import Entity

if TYPE_CHECKING:
    from platformer.entities.avatar import Avatar


class Enemy(Entity):
    """
    Walks toward the avatar while it is within sight range and hops
    when a wall blocks the way. Dies on hazards, by falling off the
    map, or when hit by fire.

    The avatar is held through a weak reference: the game state owns
    it and outlives every enemy.

    Sprite sheet: frame 0 faces right, frame 1 faces left.
    """

    half_width = 20.0
    half_height = 20.0

    def __init__(self, avatar: Avatar, physics: PhysicsConfig | None = None):
        super().__init__()
        self._avatar = weakref.ref(avatar)
        self.physics = physics or PhysicsConfig()
        self.facing = -1
        self._blocked = False

    @property
    def target(self) -> Avatar | None:
        """The avatar, if it still exists."""
        return self._avatar()

    def can_see(self, target: Avatar) -> bool:
        return target.alive and self.distance_to(target) <= self.physics.enemy_sight_range

    def step(self, time_step: float) -> None:
        if not self.alive:
            return

        p = self.physics
        target = self.target

        self.dx = 0.0
        if target is not None and self.can_see(target):
            gap = target.x - self.x
            if abs(gap) > self.half_width / 2:
                self.facing = 1 if gap > 0 else -1
                self.dx = self.facing * p.enemy_walk_speed

        # Hop over whatever stopped us last frame
        if self._blocked and self.has_ground_contact and self.dx != 0.0:
            self.dy = -p.enemy_hop_speed
        self._blocked = False

        self.dy = min(self.dy + p.gravity * time_step, p.terminal_velocity)
        self.integrate(time_step)

    def on_tile_contact(self, horizontal: bool) -> None:
        if horizontal:
            self._blocked = True

    def frame_index(self) -> int:
        return 0 if self.facing > 0 else 1
