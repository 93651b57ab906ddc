"""
Tile map - grid storage, tile classification, collision, rendering.

One TileMap instance lives for the whole game; each level load
replaces its grid contents in place.

Geometry:
- Tile (col, row) covers world [col*size, (col+1)*size) x [row*size, (row+1)*size)
- Left and right of the grid are solid walls
- Above the grid is open sky; an entity that drops below the grid dies
"""

from __future__ import annotations

import logging
import math
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np
import pygame

from tilecore.core.config import TileConfig
from tilecore.graphics.camera import ViewTransform

if TYPE_CHECKING:
    from tilecore.core.entity import Entity


logger = logging.getLogger(__name__)

# Tile id reported for positions outside the grid
OUT_OF_BOUNDS = -1

# Keeps a box that was snapped onto a tile edge from counting as inside it
EDGE_EPSILON = 1e-6

# How far below its feet an entity probes for resting ground contact
GROUND_PROBE = 0.5


class TileKind(Enum):
    """Gameplay classification of a tile id."""
    OUTSIDE = auto()  # Not on the grid
    EMPTY = auto()    # Walkable, possibly decorative
    START = auto()    # Walkable, marks the avatar start
    GOAL = auto()     # Walkable, finishes the level
    SPAWN = auto()    # Walkable, marks an enemy spawn
    HAZARD = auto()   # Walkable, kills on contact
    SOLID = auto()    # Blocks movement


class TileMap:
    """
    Represents the playfield.

    Handles:
    - Loading a level from a flat tile array
    - Tile classification (solid, hazard, goal, markers)
    - Entity vs tile collision
    - Enemy spawn activation
    - Camera-relative rendering from a tile atlas
    """

    def __init__(self, config: TileConfig | None = None):
        self.config = config or TileConfig()

        # Dimensions
        self.width: int = self.config.width  # In tiles
        self.height: int = self.config.height
        self.tile_size: int = self.config.tile_size

        # Grid data, reused across levels
        self.tiles = np.zeros((self.height, self.width), dtype=np.int32)
        self._solid = np.zeros((self.height, self.width), dtype=bool)
        self._hazard = np.zeros((self.height, self.width), dtype=bool)

        # Level markers
        self.starting_x: float = self.tile_size / 2
        self.starting_y: float = self.tile_size / 2
        self._spawns: list[tuple[int, int]] = []

        # Rendering
        self.tiles_bitmap: pygame.Surface | None = None
        self._scaled_source: pygame.Surface | None = None
        self._scaled_cache: dict[int, pygame.Surface] = {}

    @property
    def pixel_width(self) -> int:
        """Map width in world units."""
        return self.width * self.tile_size

    @property
    def pixel_height(self) -> int:
        """Map height in world units."""
        return self.height * self.tile_size

    @property
    def pending_spawns(self) -> list[tuple[int, int]]:
        """Spawn tiles (col, row) not yet activated this level."""
        return list(self._spawns)

    # Loading

    def load_from_array(self, tiles: Sequence[int]) -> None:
        """
        Replace the grid with a level's flat, row-major tile array.

        Raises:
            ValueError: If the array does not match the map dimensions
        """
        data = np.asarray(tiles, dtype=np.int32)
        if data.ndim != 1 or data.size != self.width * self.height:
            raise ValueError(
                f"Level has {data.size} tiles, map expects "
                f"{self.width}x{self.height}={self.width * self.height}"
            )
        if (data < 0).any():
            raise ValueError("Tile ids must be non-negative")

        classes = self.config.classes
        self.tiles[...] = data.reshape(self.height, self.width)
        self._solid[...] = self.tiles >= classes.solid_from
        self._hazard[...] = np.isin(self.tiles, sorted(classes.hazard))

        # np.argwhere yields cells in row-major order
        starts = np.argwhere(np.isin(self.tiles, sorted(classes.start)))
        row, col = (int(starts[0][0]), int(starts[0][1])) if len(starts) else (0, 0)
        self.starting_x, self.starting_y = self.tile_center(col, row)

        self._spawns = [
            (int(c), int(r))
            for r, c in np.argwhere(np.isin(self.tiles, sorted(classes.spawn)))
        ]
        logger.debug(
            f"Map loaded: start=({self.starting_x}, {self.starting_y}), "
            f"{len(self._spawns)} spawn tiles"
        )

    # Queries

    def tile_center(self, col: int, row: int) -> tuple[float, float]:
        """World position at the centre of a tile."""
        return ((col + 0.5) * self.tile_size, (row + 0.5) * self.tile_size)

    def tile_at(self, x: float, y: float) -> int:
        """Tile id at a world position, or OUT_OF_BOUNDS."""
        col = math.floor(x / self.tile_size)
        row = math.floor(y / self.tile_size)
        if 0 <= col < self.width and 0 <= row < self.height:
            return int(self.tiles[row, col])
        return OUT_OF_BOUNDS

    def tile_kind(self, tile_id: int) -> TileKind:
        """Classify a tile id."""
        classes = self.config.classes
        if tile_id == OUT_OF_BOUNDS:
            return TileKind.OUTSIDE
        if tile_id >= classes.solid_from:
            return TileKind.SOLID
        if tile_id in classes.goal:
            return TileKind.GOAL
        if tile_id in classes.hazard:
            return TileKind.HAZARD
        if tile_id in classes.start:
            return TileKind.START
        if tile_id in classes.spawn:
            return TileKind.SPAWN
        return TileKind.EMPTY

    def tile_is_goal(self, tile_id: int) -> bool:
        return self.tile_kind(tile_id) is TileKind.GOAL

    def tile_is_solid(self, tile_id: int) -> bool:
        return self.tile_kind(tile_id) is TileKind.SOLID

    def tile_is_hazard(self, tile_id: int) -> bool:
        return self.tile_kind(tile_id) is TileKind.HAZARD

    def is_solid_cell(self, col: int, row: int) -> bool:
        """Check if a grid cell blocks movement (side walls included)."""
        if col < 0 or col >= self.width:
            return True
        if row < 0 or row >= self.height:
            return False
        return bool(self._solid[row, col])

    def _span(self, low: float, high: float) -> range:
        """Cell indices covered by the half-open interval [low, high)."""
        return range(
            math.floor(low / self.tile_size),
            math.floor((high - EDGE_EPSILON) / self.tile_size) + 1,
        )

    def _solid_cells(self, x: float, y: float, half_w: float, half_h: float) -> list[tuple[int, int]]:
        """Solid cells (col, row) overlapped by a box centred at (x, y)."""
        return [
            (col, row)
            for row in self._span(y - half_h, y + half_h)
            for col in self._span(x - half_w, x + half_w)
            if self.is_solid_cell(col, row)
        ]

    def _touches_hazard(self, x: float, y: float, half_w: float, half_h: float) -> bool:
        rows = self._span(y - half_h, y + half_h)
        cols = self._span(x - half_w, x + half_w)
        r0, r1 = max(rows.start, 0), min(rows.stop, self.height)
        c0, c1 = max(cols.start, 0), min(cols.stop, self.width)
        if r0 >= r1 or c0 >= c1:
            return False
        return bool(self._hazard[r0:r1, c0:c1].any())

    # Collision

    def collide_entity(self, entity: Entity) -> None:
        """
        Resolve an entity against the tiles.

        Movement is resolved per axis: horizontal at the previous
        height first, then vertical. A blocked axis snaps the box to the
        tile edge and zeroes that velocity component. Landing or resting
        on a solid tile sets `has_ground_contact`. Touching a hazard or
        dropping below the map kills the entity.
        """
        if not entity.alive:
            return

        half_w = entity.half_width
        half_h = entity.half_height
        size = self.tile_size
        entity.has_ground_contact = False

        # Horizontal movement
        if entity.x != entity.last_x:
            cells = self._solid_cells(entity.x, entity.last_y, half_w, half_h)
            if cells:
                if entity.x > entity.last_x:
                    entity.x = min(col for col, _ in cells) * size - half_w
                else:
                    entity.x = (max(col for col, _ in cells) + 1) * size + half_w
                entity.dx = 0.0
                entity.on_tile_contact(horizontal=True)

        # Vertical movement
        cells = self._solid_cells(entity.x, entity.y, half_w, half_h)
        if cells:
            if entity.y >= entity.last_y:
                entity.y = min(row for _, row in cells) * size - half_h
                entity.has_ground_contact = True
            else:
                entity.y = (max(row for _, row in cells) + 1) * size + half_h
            entity.dy = 0.0
            entity.on_tile_contact(horizontal=False)
        elif self._solid_cells(entity.x, entity.y + GROUND_PROBE, half_w, half_h):
            entity.has_ground_contact = True

        if self._touches_hazard(entity.x, entity.y, half_w, half_h):
            entity.alive = False
        elif entity.y - half_h > self.pixel_height:
            entity.alive = False

    # Spawning

    def activate_spawns(self, x: float, y: float, spawn: Callable[[float, float], Any]) -> int:
        """
        Fire spawn tiles within the activation radius of (x, y).

        Each spawn tile fires at most once per level load.

        Args:
            x, y: World position (normally the avatar)
            spawn: Called with the spawn tile centre

        Returns:
            Number of spawns fired
        """
        radius_sq = self.config.spawn_radius ** 2
        remaining = []
        fired = 0
        for col, row in self._spawns:
            sx, sy = self.tile_center(col, row)
            if (sx - x) ** 2 + (sy - y) ** 2 <= radius_sq:
                spawn(sx, sy)
                fired += 1
            else:
                remaining.append((col, row))
        self._spawns = remaining
        return fired

    # Rendering

    def _is_drawn(self, tile_id: int) -> bool:
        if tile_id == 0:
            return False
        return self.tile_kind(tile_id) not in (TileKind.START, TileKind.SPAWN)

    def _scaled_atlas(self, tile_pixels: int) -> pygame.Surface:
        """Atlas scaled so one tile is `tile_pixels` wide (cached)."""
        if self._scaled_source is not self.tiles_bitmap:
            self._scaled_cache.clear()
            self._scaled_source = self.tiles_bitmap

        scaled = self._scaled_cache.get(tile_pixels)
        if scaled is None:
            columns = self.tiles_bitmap.get_width() // self.tile_size
            rows = self.tiles_bitmap.get_height() // self.tile_size
            scaled = pygame.transform.scale(
                self.tiles_bitmap,
                (columns * tile_pixels, rows * tile_pixels),
            )
            self._scaled_cache[tile_pixels] = scaled
        return scaled

    def draw(self, surface: pygame.Surface, center_x: float, center_y: float, zoom: float) -> None:
        """
        Draw visible tiles around the camera centre.

        Args:
            surface: Target surface
            center_x, center_y: World position at the centre of the surface
            zoom: Screen pixels per world unit
        """
        if self.tiles_bitmap is None:
            return

        columns = self.tiles_bitmap.get_width() // self.tile_size
        rows = self.tiles_bitmap.get_height() // self.tile_size
        if columns == 0 or rows == 0:
            return

        view = ViewTransform.for_surface(surface, center_x, center_y, zoom)
        tile_pixels = max(1, round(self.tile_size * zoom))
        atlas = self._scaled_atlas(tile_pixels)

        first_col = max(0, math.floor(view.left / self.tile_size))
        last_col = min(self.width - 1, math.floor((view.left + view.scaled_width) / self.tile_size))
        first_row = max(0, math.floor(view.top / self.tile_size))
        last_row = min(self.height - 1, math.floor((view.top + view.scaled_height) / self.tile_size))

        for row in range(first_row, last_row + 1):
            for col in range(first_col, last_col + 1):
                tile_id = int(self.tiles[row, col])
                if not self._is_drawn(tile_id) or tile_id >= columns * rows:
                    continue

                screen_x, screen_y = view.world_to_screen(col * self.tile_size, row * self.tile_size)
                area = pygame.Rect(
                    (tile_id % columns) * tile_pixels,
                    (tile_id // columns) * tile_pixels,
                    tile_pixels,
                    tile_pixels,
                )
                surface.blit(atlas, (round(screen_x), round(screen_y)), area)
