import pygame
import pytest
from tilecore.graphics.camera import ViewTransform

@pytest.fixture
def view():
    return ViewTransform(center_x=100, center_y=50, zoom=2.0, view_width=200, view_height=100)

def test_centre_maps_to_screen_centre(view):
    assert view.world_to_screen(100, 50) == (100, 50)

def test_world_to_screen_scales_offsets(view):
    assert view.world_to_screen(110, 40) == (120, 30)

def test_screen_to_world_inverts(view):
    assert view.screen_to_world(120, 30) == pytest.approx((110, 40))

def test_visible_extent(view):
    assert view.scaled_width == 100
    assert view.scaled_height == 50
    assert view.left == 50
    assert view.top == 25

def test_is_visible(view):
    assert view.is_visible(60, 30, 10, 10)
    assert view.is_visible(45, 30, 10, 10)      # straddles left edge
    assert not view.is_visible(0, 0, 10, 10)
    assert view.is_visible(0, 0, 10, 10, margin=45)

def test_scaled_size_never_zero():
    view = ViewTransform(0, 0, 0.01, 100, 100)
    assert view.scaled_size(8, 8) == (1, 1)
    assert ViewTransform(0, 0, 0.5, 100, 100).scaled_size(41, 40) == (21, 20)

def test_for_surface():
    surface = pygame.Surface((320, 240))
    view = ViewTransform.for_surface(surface, 10, 20, 1.5)
    assert (view.view_width, view.view_height) == (320, 240)
    assert (view.center_x, view.center_y, view.zoom) == (10, 20, 1.5)
