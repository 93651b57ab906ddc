import pygame
import pytest
from tilecore.core.config import TileConfig
from tilecore.core.entity import Entity
from platformer.world.tile_map import TileMap, TileKind, OUT_OF_BOUNDS

RED = (255, 0, 0, 255)
BLACK = (0, 0, 0, 255)

class Probe(Entity):
    """10x10 box that records tile contacts."""
    half_width = 5.0
    half_height = 5.0

    def __init__(self, x, y):
        super().__init__()
        self.place(x, y)
        self.contacts = []

    def on_tile_contact(self, horizontal):
        self.contacts.append(horizontal)

    def move_to(self, x, y):
        self.last_x, self.last_y = self.x, self.y
        self.x, self.y = x, y

@pytest.fixture
def tile_map(tiles_from_rows):
    m = TileMap(TileConfig(width=4, height=4, tile_size=32, spawn_radius=50.0))
    m.load_from_array(tiles_from_rows(
        "....",
        ".S.E",
        "..G^",
        "####",
    ))
    return m

def test_load_rejects_wrong_size(tile_map):
    with pytest.raises(ValueError):
        tile_map.load_from_array([0] * 15)

def test_load_rejects_negative_ids(tile_map):
    with pytest.raises(ValueError):
        tile_map.load_from_array([0] * 15 + [-3])

def test_starting_position(tile_map):
    assert (tile_map.starting_x, tile_map.starting_y) == (48, 48)

def test_starting_position_defaults_to_first_tile(tile_map):
    tile_map.load_from_array([0] * 16)
    assert (tile_map.starting_x, tile_map.starting_y) == (16, 16)

def test_tile_at(tile_map):
    assert tile_map.tile_at(70, 70) == 2
    assert tile_map.tile_at(0, 127.9) == 16
    assert tile_map.tile_at(-1, 10) == OUT_OF_BOUNDS
    assert tile_map.tile_at(10, 128) == OUT_OF_BOUNDS

def test_tile_classification(tile_map):
    assert tile_map.tile_kind(OUT_OF_BOUNDS) is TileKind.OUTSIDE
    assert tile_map.tile_kind(0) is TileKind.EMPTY
    assert tile_map.tile_kind(1) is TileKind.START
    assert tile_map.tile_kind(3) is TileKind.SPAWN
    assert tile_map.tile_kind(7) is TileKind.EMPTY
    assert tile_map.tile_is_goal(2)
    assert tile_map.tile_is_hazard(4)
    assert tile_map.tile_is_solid(16)
    assert tile_map.tile_is_solid(99)
    assert not tile_map.tile_is_goal(OUT_OF_BOUNDS)

def test_map_edges(tile_map):
    assert tile_map.is_solid_cell(-1, 0)
    assert tile_map.is_solid_cell(4, 2)
    assert not tile_map.is_solid_cell(0, -1)
    assert not tile_map.is_solid_cell(0, 4)

def test_landing_on_floor(tile_map):
    probe = Probe(16, 80)
    probe.dy = 200
    probe.move_to(16, 100)

    tile_map.collide_entity(probe)

    assert probe.y == 91
    assert probe.dy == 0
    assert probe.has_ground_contact
    assert probe.contacts == [False]
    assert probe.alive

def test_resting_on_floor_keeps_ground_contact(tile_map):
    probe = Probe(16, 91)
    tile_map.collide_entity(probe)

    assert probe.has_ground_contact
    assert probe.contacts == []

def test_airborne_has_no_ground_contact(tile_map):
    probe = Probe(16, 20)
    probe.has_ground_contact = True
    tile_map.collide_entity(probe)

    assert not probe.has_ground_contact

def test_side_wall_blocks(tile_map):
    probe = Probe(10, 20)
    probe.dx = -100
    probe.move_to(2, 20)

    tile_map.collide_entity(probe)

    assert probe.x == 5
    assert probe.dx == 0
    assert probe.contacts == [True]

def test_solid_tile_blocks_horizontally(tiles_from_rows):
    m = TileMap(TileConfig(width=4, height=2, tile_size=32))
    m.load_from_array(tiles_from_rows(
        "..#.",
        "....",
    ))
    probe = Probe(50, 16)
    probe.dx = 300
    probe.move_to(62, 16)

    m.collide_entity(probe)

    assert probe.x == 59
    assert probe.dx == 0
    assert probe.contacts == [True]

def test_ceiling_blocks_upward_motion(tiles_from_rows):
    m = TileMap(TileConfig(width=2, height=3, tile_size=32))
    m.load_from_array(tiles_from_rows(
        "##",
        "..",
        "..",
    ))
    probe = Probe(16, 40)
    probe.dy = -100
    probe.move_to(16, 35)

    m.collide_entity(probe)

    assert probe.y == 37
    assert probe.dy == 0
    assert not probe.has_ground_contact

def test_open_sky_above_map(tile_map):
    probe = Probe(16, -50)
    probe.move_to(16, -60)
    tile_map.collide_entity(probe)

    assert probe.y == -60
    assert probe.alive

def test_hazard_kills(tile_map):
    probe = Probe(112, 60)
    tile_map.collide_entity(probe)
    assert not probe.alive

def test_falling_below_map_kills(tiles_from_rows):
    m = TileMap(TileConfig(width=2, height=2, tile_size=32))
    m.load_from_array([0, 0, 0, 0])
    probe = Probe(16, 60)
    probe.move_to(16, 70)

    m.collide_entity(probe)

    assert not probe.alive

def test_dead_entity_is_ignored(tile_map):
    probe = Probe(16, 80)
    probe.move_to(16, 110)
    probe.alive = False

    tile_map.collide_entity(probe)

    assert probe.y == 110

def test_spawns_fire_once_within_radius(tile_map):
    spawned = []
    def spawn(x, y):
        spawned.append((x, y))

    assert tile_map.pending_spawns == [(3, 1)]
    assert tile_map.activate_spawns(16, 16, spawn) == 0

    assert tile_map.activate_spawns(100, 40, spawn) == 1
    assert spawned == [(112, 48)]

    assert tile_map.activate_spawns(100, 40, spawn) == 0
    assert tile_map.pending_spawns == []

def test_reload_restores_spawns(tile_map, tiles_from_rows):
    tile_map.activate_spawns(112, 48, lambda x, y: None)
    tile_map.load_from_array(tiles_from_rows("E...", "....", "....", "...."))
    assert tile_map.pending_spawns == [(0, 0)]

def test_draw_without_atlas_is_noop(tile_map):
    surface = pygame.Surface((128, 128))
    tile_map.draw(surface, 64, 64, 1.0)
    assert surface.get_at((16, 112)) == BLACK

def test_draw_blits_visible_tiles(tile_map):
    atlas = pygame.Surface((8 * 32, 3 * 32))
    atlas.fill(RED)
    tile_map.tiles_bitmap = atlas
    surface = pygame.Surface((128, 128))

    tile_map.draw(surface, 64, 64, 1.0)

    assert surface.get_at((16, 112)) == RED   # solid
    assert surface.get_at((80, 80)) == RED    # goal
    assert surface.get_at((48, 48)) == BLACK  # start marker
    assert surface.get_at((112, 48)) == BLACK  # spawn marker
    assert surface.get_at((16, 16)) == BLACK  # empty

def test_scaled_atlas_cache(tile_map):
    tile_map.tiles_bitmap = pygame.Surface((8 * 32, 3 * 32))
    first = tile_map._scaled_atlas(16)
    assert tile_map._scaled_atlas(16) is first
    assert first.get_size() == (128, 48)

    tile_map.tiles_bitmap = pygame.Surface((8 * 32, 3 * 32))
    assert tile_map._scaled_atlas(16) is not first
