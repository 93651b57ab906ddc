"""
Tilecore

A small engine layer for real-time 2D tile platformers.

Quick Start:
    from tilecore.core import Game, GameConfig
    from tilecore.resources import AssetLoader, ResourceContext
    from tilecore.haptics import Vibrator
    from platformer import GameState

    state = GameState()
    state.load_resources(ResourceContext(AssetLoader("assets"), Vibrator()))
    Game(state, GameConfig(title="abb")).run()
"""

__version__ = "0.1.0"
__author__ = "Developer"

# Re-export core components for convenience
from tilecore.core import (
    Game,
    GameConfig,
    Entity,
    SimulationConfig,
    PhysicsConfig,
    TileConfig,
    TileClasses,
    EventBus,
    Event,
    GameEvent,
    Control,
)

from tilecore.graphics import ViewTransform
from tilecore.resources import AssetLoader, AssetLoadError, ResourceContext
from tilecore.haptics import Vibrator

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
    # Graphics
    "ViewTransform",
    # Resources
    "AssetLoader",
    "AssetLoadError",
    "ResourceContext",
    # Haptics
    "Vibrator",
]
