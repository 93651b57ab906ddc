"""
Avatar - the player-controlled entity.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Mapping, Optional

from tilecore.core.actions import Control, DEFAULT_KEY_BINDINGS
from tilecore.core.config import PhysicsConfig
from tilecore.core.entity import Entity


# Signature of GameState.create_fire_projectile
ProjectileSpawner = Callable[[float, float, float, float], Any]


class Avatar(Entity):
    """
    Player entity driven by key state.

    There is exactly one Avatar per game session. Other objects (the
    camera, enemies) hold long-lived references to it, so a reset
    moves and revives this instance instead of replacing it.

    Sprite sheet: frame 0 faces right, frame 1 faces left.
    """

    half_width = 20.0
    half_height = 28.0

    def __init__(
        self,
        physics: PhysicsConfig | None = None,
        key_bindings: Optional[Mapping[int, Control]] = None,
        spawn_projectile: Optional[ProjectileSpawner] = None,
    ):
        super().__init__()
        self.physics = physics or PhysicsConfig()
        self.key_bindings: dict[int, Control] = dict(
            DEFAULT_KEY_BINDINGS if key_bindings is None else key_bindings
        )
        self.spawn_projectile = spawn_projectile
        self.controls = Control.NONE
        self.facing = 1
        self._held_keys: set[int] = set()
        self._fire_cooldown = 0.0

    # Input

    def set_key_state(self, key_code: int, pressed: int) -> bool:
        """
        Record a key press (1) or release (0).

        Returns:
            True if the key is bound to an avatar control
        """
        if key_code not in self.key_bindings:
            return False

        if pressed:
            self._held_keys.add(key_code)
        else:
            self._held_keys.discard(key_code)

        controls = Control.NONE
        for key in self._held_keys:
            controls |= self.key_bindings[key]
        self.controls = controls
        return True

    def is_held(self, control: Control) -> bool:
        return bool(self.controls & control)

    def stop(self) -> None:
        """Clear velocity, held controls and the fire cooldown."""
        super().stop()
        self.controls = Control.NONE
        self._held_keys.clear()
        self._fire_cooldown = 0.0
        self.has_ground_contact = False

    # Simulation

    def step(self, time_step: float) -> None:
        if not self.alive:
            return

        p = self.physics

        # Run
        direction = 0
        if self.is_held(Control.LEFT):
            direction -= 1
        if self.is_held(Control.RIGHT):
            direction += 1

        if direction:
            self.facing = direction
            self.dx += direction * p.run_acceleration * time_step
            self.dx = max(-p.max_run_speed, min(self.dx, p.max_run_speed))
        elif self.has_ground_contact:
            slow = p.ground_friction * time_step
            self.dx = 0.0 if abs(self.dx) <= slow else self.dx - math.copysign(slow, self.dx)

        # Jump
        if self.is_held(Control.JUMP) and self.has_ground_contact:
            self.dy = -p.jump_speed
            self.has_ground_contact = False

        # Fall
        self.dy = min(self.dy + p.gravity * time_step, p.terminal_velocity)

        # Shoot
        self._fire_cooldown = max(0.0, self._fire_cooldown - time_step)
        if self.is_held(Control.FIRE) and self._fire_cooldown == 0.0:
            self._fire()

        self.integrate(time_step)

    def _fire(self) -> None:
        if self.spawn_projectile is None:
            return
        self.spawn_projectile(
            self.x + self.facing * self.half_width,
            self.y,
            self.facing * self.physics.fire_speed,
            0.0,
        )
        self._fire_cooldown = self.physics.fire_cooldown

    def frame_index(self) -> int:
        return 0 if self.facing > 0 else 1
