import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure tilecore/platformer can be imported
sys.path.append(os.getcwd())

# Level legend shared by the map and game state tests
TILE_CHARS = {".": 0, "S": 1, "G": 2, "E": 3, "^": 4, "#": 16, "=": 17}


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.

    Surfaces, pygame.image and pygame.transform stay real so drawing
    can be checked pixel by pixel.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.joystick'), \
         patch('pygame.key'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from tilecore.core.events import EventBus
    return EventBus()


@pytest.fixture
def tiles_from_rows():
    """Build a flat tile array from rows of legend characters."""
    def build(*rows):
        return [TILE_CHARS[ch] for row in rows for ch in row]
    return build


@pytest.fixture
def config():
    """Small, seeded simulation: 8x6 map of 64-unit tiles."""
    from tilecore.core.config import SimulationConfig, TileConfig
    return SimulationConfig(
        random_seed=1234,
        tiles=TileConfig(width=8, height=6, tile_size=64, spawn_radius=200.0),
    )


@pytest.fixture
def sprite_sheets():
    """Plain sprite sheets sized for the default entity kinds."""
    import pygame
    avatar = pygame.Surface((80, 56), pygame.SRCALPHA)
    avatar.fill((0, 0, 255))
    enemy = pygame.Surface((80, 40), pygame.SRCALPHA)
    enemy.fill((0, 255, 0))
    misc = pygame.Surface((32, 16), pygame.SRCALPHA)
    misc.fill((255, 128, 0))
    return avatar, enemy, misc


@pytest.fixture
def make_atlas():
    """Tile atlas with 8 columns and 3 rows of cells."""
    import pygame

    def build(tile_size, color=(128, 128, 128)):
        atlas = pygame.Surface((tile_size * 8, tile_size * 3), pygame.SRCALPHA)
        atlas.fill(color)
        return atlas
    return build


@pytest.fixture
def state(config, event_bus, sprite_sheets, make_atlas, tiles_from_rows):
    """GameState on a single flat level, loaded and ready to step."""
    from platformer.game_state import GameState

    game_state = GameState(config, event_bus)
    avatar_sheet, enemy_sheet, misc_sheet = sprite_sheets
    game_state.avatar.sprite = avatar_sheet
    game_state.enemy_sprites = enemy_sheet
    game_state.misc_sprites = misc_sheet

    level = tiles_from_rows(
        "........",
        "........",
        "........",
        ".S......",
        "########",
        "########",
    )
    game_state.define_levels([level], [make_atlas(64)])
    game_state.load_level(0)
    return game_state
