"""
World module - the tile map.

Provides:
- TileMap: grid storage, classification, collision and rendering
- TileKind: gameplay classification of tile ids
"""

from platformer.world.tile_map import (
    TileMap,
    TileKind,
    OUT_OF_BOUNDS,
)

__all__ = [
    "TileMap",
    "TileKind",
    "OUT_OF_BOUNDS",
]
