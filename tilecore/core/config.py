"""
Simulation tuning constants.

All gameplay constants live in validated Pydantic models so that a
bad value fails when the configuration is built, not mid-frame.

Units:
- Distances are world units (one tile is `TileConfig.tile_size` units)
- Velocities are world units per second
- Accelerations are world units per second squared
- Times are seconds unless the field name says otherwise

Usage:
    config = SimulationConfig(blood_bath_size=8)
    config.physics.gravity = 1200.0
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TuningModel(BaseModel):
    """Base class for tuning models."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )


class PhysicsConfig(TuningModel):
    """
    Movement constants for every entity kind.

    Attributes:
        gravity: Downward acceleration applied to avatar, enemies and blood
        run_acceleration: Avatar horizontal acceleration while a direction is held
        max_run_speed: Avatar horizontal speed cap
        ground_friction: Avatar horizontal deceleration with no input held
        jump_speed: Upward speed given by a jump
        terminal_velocity: Cap on falling speed
        fire_speed: Horizontal speed of a fire projectile
        fire_cooldown: Minimum time between two shots
        fire_lifetime: Time before a fire projectile burns out
        enemy_walk_speed: Enemy horizontal speed while chasing
        enemy_sight_range: Distance at which an enemy notices the avatar
        enemy_hop_speed: Upward speed of an enemy hopping over a wall
        blood_lifetime: Time before a blood particle disappears
        blood_drag: Fraction of blood velocity lost per second (0-1)
    """
    gravity: float = Field(default=900.0, ge=0.0)
    run_acceleration: float = Field(default=1200.0, ge=0.0)
    max_run_speed: float = Field(default=260.0, gt=0.0)
    ground_friction: float = Field(default=1500.0, ge=0.0)
    jump_speed: float = Field(default=620.0, ge=0.0)
    terminal_velocity: float = Field(default=700.0, gt=0.0)
    fire_speed: float = Field(default=500.0, ge=0.0)
    fire_cooldown: float = Field(default=0.3, ge=0.0)
    fire_lifetime: float = Field(default=1.0, gt=0.0)
    enemy_walk_speed: float = Field(default=90.0, ge=0.0)
    enemy_sight_range: float = Field(default=320.0, ge=0.0)
    enemy_hop_speed: float = Field(default=300.0, ge=0.0)
    blood_lifetime: float = Field(default=0.8, gt=0.0)
    blood_drag: float = Field(default=0.5, ge=0.0, le=1.0)


class TileClasses(TuningModel):
    """
    Classification of tile ids.

    Ids not listed in any set are empty unless they are at or above
    `solid_from`. Start and spawn tiles are walkable markers.
    """
    start: set[int] = Field(default_factory=lambda: {1})
    goal: set[int] = Field(default_factory=lambda: {2})
    spawn: set[int] = Field(default_factory=lambda: {3})
    hazard: set[int] = Field(default_factory=lambda: {4, 5})
    solid_from: int = Field(default=16, ge=1)

    @model_validator(mode='after')
    def _check_disjoint(self) -> TileClasses:
        seen: set[int] = set()
        for name in ("start", "goal", "spawn", "hazard"):
            ids = getattr(self, name)
            if ids & seen:
                raise ValueError(f"Tile ids {sorted(ids & seen)} are classified twice")
            if any(i >= self.solid_from for i in ids):
                raise ValueError(f"'{name}' tile ids must be below solid_from")
            seen |= ids
        return self


class TileConfig(TuningModel):
    """
    Map geometry.

    Attributes:
        width: Map width in tiles
        height: Map height in tiles
        tile_size: Edge length of a tile in world units
        spawn_radius: Distance from the avatar at which spawn tiles activate
        classes: Tile id classification
    """
    width: int = Field(default=32, gt=0)
    height: int = Field(default=14, gt=0)
    tile_size: int = Field(default=64, gt=0)
    spawn_radius: float = Field(default=640.0, ge=0.0)
    classes: TileClasses = Field(default_factory=TileClasses)


class SimulationConfig(TuningModel):
    """
    Top-level simulation constants.

    Attributes:
        air_zoom: Camera zoom while the avatar is airborne
        ground_zoom: Camera zoom while the avatar stands on ground
        zoom_speed: Fraction of the zoom gap closed per frame (0-1]
        blood_bath_size: Blood particles spawned per enemy death
        blood_bath_velocity: Scale of the random blood velocity
        vibrate_length_ms: Haptic pulse length on enemy death, milliseconds
        max_time_step: Largest time step simulated in one frame
        backgrounds: Cyclic palette of clear colours, indexed by level
        random_seed: Seed for effect randomness (None for entropy)
    """
    air_zoom: float = Field(default=0.5, gt=0.0)
    ground_zoom: float = Field(default=0.8, gt=0.0)
    zoom_speed: float = Field(default=0.05, gt=0.0, le=1.0)
    blood_bath_size: int = Field(default=6, ge=0)
    blood_bath_velocity: float = Field(default=100.0, ge=0.0)
    vibrate_length_ms: int = Field(default=30, ge=0)
    max_time_step: float = Field(default=1 / 15, gt=0.0)
    backgrounds: list[tuple[int, int, int]] = Field(
        default_factory=lambda: [(5, 5, 5), (50, 50, 50), (10, 5, 5)]
    )
    random_seed: int | None = None
    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    tiles: TileConfig = Field(default_factory=TileConfig)

    @field_validator('backgrounds')
    @classmethod
    def _check_backgrounds(cls, value: list[tuple[int, int, int]]) -> list[tuple[int, int, int]]:
        if not value:
            raise ValueError("At least one background colour is required")
        for colour in value:
            if any(c < 0 or c > 255 for c in colour):
                raise ValueError(f"Background colour out of range: {colour}")
        return value
