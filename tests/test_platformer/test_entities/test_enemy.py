import gc
import pytest
from tilecore.core.config import PhysicsConfig
from platformer.entities.avatar import Avatar
from platformer.entities.enemy import Enemy

@pytest.fixture
def avatar():
    a = Avatar()
    a.place(100, 0)
    return a

@pytest.fixture
def enemy(avatar):
    return Enemy(avatar, PhysicsConfig())

def test_chases_visible_avatar(enemy):
    enemy.step(0.1)

    assert enemy.dx == 90
    assert enemy.facing == 1
    assert enemy.x == pytest.approx(9)
    assert enemy.dy == pytest.approx(90)

def test_turns_toward_avatar(enemy, avatar):
    avatar.place(-100, 0)
    enemy.step(0.1)

    assert enemy.dx == -90
    assert enemy.frame_index() == 1

def test_ignores_distant_avatar(enemy, avatar):
    avatar.place(1000, 0)
    enemy.step(0.1)
    assert enemy.dx == 0

def test_ignores_dead_avatar(enemy, avatar):
    avatar.alive = False
    enemy.step(0.1)
    assert enemy.dx == 0

def test_stands_still_when_on_top_of_avatar(enemy, avatar):
    avatar.place(5, 0)
    enemy.step(0.1)
    assert enemy.dx == 0

def test_hops_when_blocked(enemy):
    enemy.has_ground_contact = True
    enemy.on_tile_contact(horizontal=True)

    enemy.step(0.01)
    assert enemy.dy == pytest.approx(-291)

    # Blocked flag is consumed by the hop
    enemy.dy = 0
    enemy.has_ground_contact = True
    enemy.step(0.01)
    assert enemy.dy == pytest.approx(9)

def test_vertical_contact_does_not_hop(enemy):
    enemy.has_ground_contact = True
    enemy.on_tile_contact(horizontal=False)
    enemy.step(0.01)
    assert enemy.dy == pytest.approx(9)

def test_does_not_keep_avatar_alive():
    avatar = Avatar()
    enemy = Enemy(avatar)
    assert enemy.target is avatar

    del avatar
    gc.collect()

    assert enemy.target is None
    enemy.step(0.1)
    assert enemy.dx == 0

def test_dead_enemy_is_inert(enemy):
    enemy.alive = False
    enemy.step(0.1)
    assert (enemy.x, enemy.y) == (0, 0)
