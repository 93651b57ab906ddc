"""
Entity class - the common moving-object abstraction.

Every simulated object (avatar, enemies, projectiles, particles) is
an Entity with a position, a velocity, a shared sprite sheet and an
alive flag. Each kind supplies its own step/draw/collide behavior by
overriding the hooks below; callers never inspect the concrete type.

Usage:
    class Rock(Entity):
        half_width = 8.0
        half_height = 8.0

        def step(self, time_step: float) -> None:
            if not self.alive:
                return
            self.dy += 900.0 * time_step
            self.integrate(time_step)

    rock = Rock(x=100, y=0)
    rock.step(1 / 60)
    rock.draw(screen, camera_x, camera_y, zoom)
"""

from __future__ import annotations

import itertools

import pygame

from tilecore.graphics.camera import ViewTransform


class Entity:
    """
    Base class for all simulated objects.

    Positions are entity centres in world units. An entity whose
    `alive` flag is False is inert: step and collide calls do nothing
    and its owner removes it at the next sweep.
    """

    # Global entity ID counter
    _id_counter = itertools.count(1)

    # Collision box half extents; sprite sheet cells share this size
    half_width: float = 16.0
    half_height: float = 16.0

    # Top-left of this kind's frames in a shared sprite sheet
    sheet_origin: tuple[int, int] = (0, 0)

    def __init__(self, x: float = 0.0, y: float = 0.0, dx: float = 0.0, dy: float = 0.0):
        self._id = next(Entity._id_counter)
        self.x = x
        self.y = y
        self.dx = dx
        self.dy = dy
        self.last_x = x
        self.last_y = y
        self.sprite: pygame.Surface | None = None
        self.alive = True
        self.has_ground_contact = False

    @property
    def id(self) -> int:
        """Unique entity identifier."""
        return self._id

    # Behavior hooks

    def step(self, time_step: float) -> None:
        """Advance the entity by `time_step` seconds."""
        if not self.alive:
            return
        self.integrate(time_step)

    def collide_entity(self, other: Entity) -> None:
        """React to another entity. The default kind ignores everything."""

    def on_tile_contact(self, horizontal: bool) -> None:
        """Called by the map when a solid tile blocked an axis of movement."""

    def frame_index(self) -> int:
        """Column of the current frame in this kind's sprite sheet row."""
        return 0

    def frame_rect(self) -> pygame.Rect:
        """Sprite sheet cell for the current animation frame."""
        w, h = int(self.width), int(self.height)
        origin_x, origin_y = self.sheet_origin
        return pygame.Rect(origin_x + self.frame_index() * w, origin_y, w, h)

    # Shared mechanics

    def integrate(self, time_step: float) -> None:
        """Move by the current velocity, remembering the previous position."""
        self.last_x = self.x
        self.last_y = self.y
        self.x += self.dx * time_step
        self.y += self.dy * time_step

    def place(self, x: float, y: float) -> None:
        """Teleport without implying any direction of travel."""
        self.x = self.last_x = x
        self.y = self.last_y = y

    def stop(self) -> None:
        """Zero the velocity."""
        self.dx = 0.0
        self.dy = 0.0

    @property
    def width(self) -> float:
        return self.half_width * 2

    @property
    def height(self) -> float:
        return self.half_height * 2

    def get_bounds(self) -> tuple[float, float, float, float]:
        """
        Get collision box bounds.

        Returns:
            (left, top, right, bottom)
        """
        return (
            self.x - self.half_width,
            self.y - self.half_height,
            self.x + self.half_width,
            self.y + self.half_height,
        )

    def overlaps(self, other: Entity) -> bool:
        """Axis-aligned box intersection test."""
        a = self.get_bounds()
        b = other.get_bounds()
        return not (a[2] <= b[0] or a[0] >= b[2] or a[3] <= b[1] or a[1] >= b[3])

    def distance_to(self, other: Entity) -> float:
        """Distance between entity centres."""
        dx = other.x - self.x
        dy = other.y - self.y
        return (dx * dx + dy * dy) ** 0.5

    # Rendering

    def draw(self, surface: pygame.Surface, center_x: float, center_y: float, zoom: float) -> None:
        """
        Draw the current frame centred on the entity.

        Args:
            surface: Target surface
            center_x, center_y: World position at the centre of the surface
            zoom: Screen pixels per world unit
        """
        if not self.alive or self.sprite is None:
            return

        view = ViewTransform.for_surface(surface, center_x, center_y, zoom)
        if not view.is_visible(self.x - self.half_width, self.y - self.half_height,
                               self.width, self.height):
            return

        size = view.scaled_size(self.width, self.height)
        frame = self.sprite.subsurface(self.frame_rect())
        if size != frame.get_size():
            frame = pygame.transform.scale(frame, size)

        screen_x, screen_y = view.world_to_screen(self.x, self.y)
        surface.blit(frame, (round(screen_x - size[0] / 2), round(screen_y - size[1] / 2)))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id}, x={self.x:.1f}, y={self.y:.1f}, "
            f"alive={self.alive})"
        )
