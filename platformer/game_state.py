"""
Game state - the simulation aggregate root.

GameState owns the avatar, the tile map and every other entity. Each
frame the driver calls `update(time_step, surface)`, which steps the
simulation and then draws it:

    step:  zoom -> avatar -> deaths/goal -> spawns -> enemies
           -> projectiles -> particles
    draw:  map -> enemies -> avatar -> projectiles -> particles

Death and level completion are state transitions, never exceptions.
"""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING, Sequence

import pygame

from tilecore.core.config import SimulationConfig
from tilecore.core.entity import Entity
from tilecore.core.events import EventBus, GameEvent
from tilecore.resources.assets import AssetLoader, AssetLoadError, ResourceContext
from platformer.entities import Avatar, Blood, Enemy, Fire
from platformer.world import TileMap

if TYPE_CHECKING:
    from tilecore.haptics.vibrator import Vibrator


logger = logging.getLogger(__name__)

# Image ids expected in the asset manifest
AVATAR_SPRITES = "avatar"
ENEMY_SPRITES = "enemy_0"
MISC_SPRITES = "misc"

# Optional int array in the manifest: play order as indices into its levels
LEVEL_ORDER = "level_order"


class GameState:
    """
    Owns and advances everything in a game session.

    Usage:
        state = GameState(SimulationConfig(random_seed=7))
        state.load_resources(ResourceContext(AssetLoader("assets"), Vibrator()))

        # In the frame loop:
        state.on_key_down(pygame.K_RIGHT)
        state.update(1 / 60, screen)
    """

    def __init__(self, config: SimulationConfig | None = None, event_bus: EventBus | None = None):
        self.config = config or SimulationConfig()
        self.event_bus = event_bus or EventBus()

        self.map = TileMap(self.config.tiles)
        self.avatar = Avatar(
            self.config.physics,
            spawn_projectile=self.create_fire_projectile,
        )

        # Entity collections, iterated in insertion order
        self.enemies: list[Enemy] = []
        self.particles: list[Entity] = []
        self.projectiles: list[Entity] = []

        # Shared sprite sheets
        self.enemy_sprites: pygame.Surface | None = None
        self.misc_sprites: pygame.Surface | None = None

        # Level definitions, fixed after loading
        self._levels: tuple[tuple[int, ...], ...] = ()
        self._tiles: tuple[pygame.Surface, ...] = ()
        self.current_level = 0

        # View
        self.zoom = self.config.ground_zoom
        self.target_zoom = self.config.ground_zoom

        self._random = random.Random(self.config.random_seed)
        self._vibrator: Vibrator | None = None

    @property
    def level_count(self) -> int:
        return len(self._levels)

    @property
    def atlas_count(self) -> int:
        return len(self._tiles)

    @property
    def background_color(self) -> tuple[int, int, int]:
        """Clear colour for the current level (cyclic palette)."""
        backgrounds = self.config.backgrounds
        return backgrounds[self.current_level % len(backgrounds)]

    # Startup

    def load_resources(self, context: ResourceContext) -> None:
        """
        Decode sprites and level data, then load the current level.

        Raises:
            AssetLoadError: If any resource is missing or invalid
        """
        assets = context.assets
        self._vibrator = context.vibrator

        self.avatar.sprite = assets.decode_image(AVATAR_SPRITES)
        self.enemy_sprites = assets.decode_image(ENEMY_SPRITES)
        self.misc_sprites = assets.decode_image(MISC_SPRITES)

        atlases = [assets.decode_image(atlas_id) for atlas_id in assets.atlas_ids]
        levels = [assets.decode_level(level_id) for level_id in self._play_order(assets)]
        try:
            self.define_levels(levels, atlases)
        except ValueError as e:
            raise AssetLoadError(str(e)) from e

        logger.info(f"Loaded {len(levels)} levels and {len(atlases)} tile atlases")
        self.load_level(self.current_level)

    def _play_order(self, assets: AssetLoader) -> list[str]:
        """Level ids in play order; manifest order unless `level_order` is given."""
        level_ids = assets.level_ids
        if LEVEL_ORDER not in assets.array_ids:
            return level_ids

        order = assets.decode_int_array(LEVEL_ORDER)
        bad = [i for i in order if not 0 <= i < len(level_ids)]
        if bad:
            raise AssetLoadError(f"Level order references missing levels: {bad}")
        return [level_ids[i] for i in order]

    def define_levels(
        self,
        levels: Sequence[Sequence[int]],
        atlases: Sequence[pygame.Surface],
    ) -> None:
        """
        Install the level definitions.

        Raises:
            ValueError: If either collection is empty or a level does not
                fit the map
        """
        if not levels:
            raise ValueError("At least one level is required")
        if not atlases:
            raise ValueError("At least one tile atlas is required")

        expected = self.map.width * self.map.height
        for index, level in enumerate(levels):
            if len(level) != expected:
                raise ValueError(
                    f"Level {index} has {len(level)} tiles, map expects {expected}"
                )

        self._levels = tuple(tuple(level) for level in levels)
        self._tiles = tuple(atlases)

    # Driver interface

    def on_key_down(self, key_code: int) -> bool:
        return self.avatar.set_key_state(key_code, 1)

    def on_key_up(self, key_code: int) -> bool:
        return self.avatar.set_key_state(key_code, 0)

    def update(self, time_step: float, surface: pygame.Surface) -> bool:
        """Step then draw one frame. Always returns True (keep running)."""
        self.step_game(time_step)
        self.draw_game(surface)
        return True

    # Level flow

    def reset(self) -> None:
        """Revive the avatar, stationary, at the map's starting position."""
        self.avatar.stop()
        self.avatar.alive = True
        self.avatar.place(self.map.starting_x, self.map.starting_y)
        self.event_bus.publish(GameEvent.AVATAR_RESET)

    def load_level(self, level: int) -> None:
        """
        Load a level by index.

        The counter is kept as given; it wraps independently over the
        levels, the tile atlases and the background palette. Enemies are
        discarded; projectiles and particles carry over.

        Raises:
            ValueError: If no level data has been loaded
        """
        if not self._levels or not self._tiles:
            raise ValueError("No levels loaded")

        level_index = level % len(self._levels)
        self.map.load_from_array(self._levels[level_index])
        self.map.tiles_bitmap = self._tiles[level % len(self._tiles)]
        self.enemies.clear()
        self.current_level = level
        self.reset()

        logger.info(f"Level {level_index} loaded (requested {level})")
        self.event_bus.publish(GameEvent.LEVEL_LOADED, level=level, index=level_index)

    # Simulation

    def _sanitize_time_step(self, time_step: float) -> float:
        """Map a raw frame time into the supported [0, max_time_step] range."""
        if math.isnan(time_step) or time_step < 0.0:
            logger.debug(f"Ignoring invalid time step {time_step}")
            return 0.0
        if time_step > self.config.max_time_step:
            logger.debug(f"Clamping time step {time_step:.3f}s to {self.config.max_time_step:.3f}s")
            return self.config.max_time_step
        return time_step

    def step_game(self, time_step: float) -> None:
        """Run the simulation for `time_step` seconds."""
        time_step = self._sanitize_time_step(time_step)

        # Update the view parameters
        self.target_zoom = self.config.ground_zoom
        if not self.avatar.has_ground_contact:
            self.target_zoom = self.config.air_zoom
        self.zoom += (self.target_zoom - self.zoom) * self.config.zoom_speed

        # Step the avatar
        self.avatar.step(time_step)
        self.map.collide_entity(self.avatar)
        if not self.avatar.alive:
            self.event_bus.publish(GameEvent.AVATAR_DIED, x=self.avatar.x, y=self.avatar.y)
            self.reset()
        if self.map.tile_is_goal(self.map.tile_at(self.avatar.x, self.avatar.y)):
            self.event_bus.publish(GameEvent.GOAL_REACHED, level=self.current_level)
            self.load_level(self.current_level + 1)

        self.map.activate_spawns(self.avatar.x, self.avatar.y, self._spawn_enemy)

        # Step the enemies
        survivors: list[Enemy] = []
        for enemy in self.enemies:
            if enemy.alive:
                enemy.step(time_step)
                self.map.collide_entity(enemy)
            if enemy.alive:
                survivors.append(enemy)
            else:
                self._on_enemy_death(enemy)
        self.enemies[:] = survivors

        # Step the projectiles and collide them against the enemies
        live_projectiles: list[Entity] = []
        for projectile in self.projectiles:
            if projectile.alive:
                projectile.step(time_step)
                for enemy in self.enemies:
                    projectile.collide_entity(enemy)
            if projectile.alive:
                live_projectiles.append(projectile)
        self.projectiles[:] = live_projectiles

        # Step the particles
        live_particles: list[Entity] = []
        for particle in self.particles:
            if particle.alive:
                particle.step(time_step)
            if particle.alive:
                live_particles.append(particle)
        self.particles[:] = live_particles

    def _spawn_enemy(self, x: float, y: float) -> Enemy:
        enemy = self.create_enemy(x, y)
        logger.debug(f"Spawned {enemy}")
        self.event_bus.publish(GameEvent.ENEMY_SPAWNED, enemy=enemy)
        return enemy

    def _on_enemy_death(self, enemy: Enemy) -> None:
        """Buzz and spray blood from a dead enemy."""
        self.vibrate()
        for _ in range(self.config.blood_bath_size):
            random_angle = self._random.random() * 2.0 * math.pi
            random_magnitude = self.config.blood_bath_velocity * self._random.random() / 3.0
            self.create_blood_particle(
                enemy.x, enemy.y,
                enemy.dx + random_magnitude * math.cos(random_angle),
                enemy.dy + random_magnitude * math.sin(random_angle),
            )
        self.event_bus.publish(GameEvent.ENEMY_KILLED, enemy=enemy)

    # Rendering

    def draw_game(self, surface: pygame.Surface) -> None:
        """
        Draw the game state. The map and entities are always drawn with
        the avatar centred on the surface.
        """
        surface.fill(self.background_color)

        center_x = self.avatar.x
        center_y = self.avatar.y
        zoom = self.zoom

        self.map.draw(surface, center_x, center_y, zoom)
        for enemy in self.enemies:
            enemy.draw(surface, center_x, center_y, zoom)
        self.avatar.draw(surface, center_x, center_y, zoom)
        for projectile in self.projectiles:
            projectile.draw(surface, center_x, center_y, zoom)
        for particle in self.particles:
            particle.draw(surface, center_x, center_y, zoom)

    # Factories

    def create_enemy(self, x: float, y: float) -> Enemy:
        enemy = Enemy(self.avatar, self.config.physics)
        enemy.sprite = self.enemy_sprites
        enemy.place(x, y)
        self.enemies.append(enemy)
        return enemy

    def create_blood_particle(self, x: float, y: float, dx: float, dy: float) -> Blood:
        physics = self.config.physics
        blood = Blood(physics.blood_lifetime, physics.gravity, physics.blood_drag)
        blood.sprite = self.misc_sprites
        blood.place(x, y)
        blood.dx = dx
        blood.dy = dy
        self.particles.append(blood)
        return blood

    def create_fire_projectile(self, x: float, y: float, dx: float, dy: float) -> Fire:
        fire = Fire(self.config.physics.fire_lifetime)
        fire.sprite = self.misc_sprites
        fire.place(x, y)
        fire.dx = dx
        fire.dy = dy
        self.projectiles.append(fire)
        return fire

    # Services

    def vibrate(self) -> None:
        """Short haptic pulse; does nothing without a haptics device."""
        if self._vibrator is None:
            return
        self._vibrator.vibrate(self.config.vibrate_length_ms)
