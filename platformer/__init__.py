"""
Platformer

A tile platformer built on tilecore: run, jump, shoot, reach the goal.

Provides:
- GameState: the simulation aggregate root
- Entity kinds: Avatar, Enemy, Fire, Blood
- TileMap: level grid, collision and rendering
"""

from platformer.entities import Avatar, Enemy, Fire, Blood
from platformer.world import TileMap, TileKind
from platformer.game_state import GameState

__all__ = [
    "GameState",
    "Avatar",
    "Enemy",
    "Fire",
    "Blood",
    "TileMap",
    "TileKind",
]
