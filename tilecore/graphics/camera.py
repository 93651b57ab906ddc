"""
View transform for camera-relative rendering.

Converts between world and screen coordinates for a camera
centred on a world point with a zoom factor. Every drawable in a
frame receives the same centre and zoom, so everything renders in
one camera space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import pygame


@dataclass(frozen=True)
class ViewTransform:
    """
    Camera centred on a world point.

    Usage:
        view = ViewTransform.for_surface(screen, avatar.x, avatar.y, zoom)
        sx, sy = view.world_to_screen(enemy.x, enemy.y)
        if view.is_visible(left, top, width, height):
            ...

    Attributes:
        center_x, center_y: World position shown at the view centre
        zoom: Screen pixels per world unit
        view_width, view_height: Screen size in pixels
    """
    center_x: float
    center_y: float
    zoom: float
    view_width: float
    view_height: float

    @classmethod
    def for_surface(
        cls,
        surface: pygame.Surface,
        center_x: float,
        center_y: float,
        zoom: float,
    ) -> ViewTransform:
        """Build a view covering a whole surface."""
        width, height = surface.get_size()
        return cls(center_x, center_y, zoom, width, height)

    @property
    def scaled_width(self) -> float:
        """View width in world units."""
        return self.view_width / self.zoom

    @property
    def scaled_height(self) -> float:
        """View height in world units."""
        return self.view_height / self.zoom

    @property
    def left(self) -> float:
        """World X at the left screen edge."""
        return self.center_x - self.scaled_width / 2

    @property
    def top(self) -> float:
        """World Y at the top screen edge."""
        return self.center_y - self.scaled_height / 2

    # Coordinate conversion

    def world_to_screen(self, world_x: float, world_y: float) -> tuple[float, float]:
        """Convert world coordinates to screen coordinates."""
        return (
            (world_x - self.center_x) * self.zoom + self.view_width / 2,
            (world_y - self.center_y) * self.zoom + self.view_height / 2,
        )

    def screen_to_world(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Convert screen coordinates to world coordinates."""
        return (
            (screen_x - self.view_width / 2) / self.zoom + self.center_x,
            (screen_y - self.view_height / 2) / self.zoom + self.center_y,
        )

    def scaled_size(self, width: float, height: float) -> tuple[int, int]:
        """Pixel size of a world-space extent, never smaller than 1x1."""
        return (
            max(1, int(math.ceil(width * self.zoom))),
            max(1, int(math.ceil(height * self.zoom))),
        )

    def is_visible(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        margin: float = 0,
    ) -> bool:
        """
        Check if a rectangle is visible in the view.

        Args:
            x, y: Top-left of rectangle (world units)
            width, height: Size of rectangle
            margin: Extra margin around view

        Returns:
            True if any part of the rectangle is visible
        """
        view_left = self.left - margin
        view_top = self.top - margin
        view_right = self.left + self.scaled_width + margin
        view_bottom = self.top + self.scaled_height + margin

        return not (
            x + width < view_left or
            x > view_right or
            y + height < view_top or
            y > view_bottom
        )
