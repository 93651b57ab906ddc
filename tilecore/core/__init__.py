"""
Core engine module.

Exports:
- Game, GameConfig: Window driver and its configuration
- Entity: Base class for simulated objects
- SimulationConfig, PhysicsConfig, TileConfig, TileClasses: Tuning constants
- EventBus, Event, GameEvent: Event system
- Control, DEFAULT_KEY_BINDINGS: Input controls
"""

from tilecore.core.actions import Control, DEFAULT_KEY_BINDINGS
from tilecore.core.config import (
    SimulationConfig,
    PhysicsConfig,
    TileConfig,
    TileClasses,
)
from tilecore.core.entity import Entity
from tilecore.core.events import EventBus, Event, GameEvent
from tilecore.core.game import Game, GameConfig

__all__ = [
    # Driver
    "Game",
    "GameConfig",
    # Entities
    "Entity",
    # Configuration
    "SimulationConfig",
    "PhysicsConfig",
    "TileConfig",
    "TileClasses",
    # Events
    "EventBus",
    "Event",
    "GameEvent",
    # Input
    "Control",
    "DEFAULT_KEY_BINDINGS",
]
