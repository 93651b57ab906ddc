"""
Core Game class - the platform shell around a simulation.

The Game class is the main entry point for running a game. It handles:
- Window creation (Pygame)
- Forwarding key events to the simulation
- One variable-timestep update per frame (step, then draw)
- Frame pacing and the FPS readout
- The level counter in the window title (via the event bus)
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

import pygame

from tilecore.core.events import Event, EventBus, GameEvent


logger = logging.getLogger(__name__)


class Playable(Protocol):
    """What the driver needs from a simulation."""

    def on_key_down(self, key_code: int) -> bool: ...

    def on_key_up(self, key_code: int) -> bool: ...

    def update(self, time_step: float, surface: pygame.Surface) -> bool: ...


class GameConfig:
    """Configuration for the window driver."""

    def __init__(
        self,
        title: str = "abb",
        width: int = 960,
        height: int = 540,
        target_fps: int = 60,
        max_frame_time: float = 0.25,
        fullscreen: bool = False,
        resizable: bool = True,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.max_frame_time = max_frame_time
        self.fullscreen = fullscreen
        self.resizable = resizable


class Game:
    """
    Window driver.

    Calls `update(time_step, screen)` on the simulation exactly once
    per frame. The simulation never ends the loop itself; closing the
    window or calling `quit()` does. Given the simulation's event bus,
    the window title follows the level counter.

    Usage:
        game = Game(game_state, GameConfig(title="abb"), game_state.event_bus)
        game.run()
    """

    def __init__(
        self,
        simulation: Playable,
        config: GameConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.simulation = simulation
        self.config = config or GameConfig()
        self.level: int | None = None
        self._running = False
        self._paused = False

        pygame.init()

        flags = 0
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN
        if self.config.resizable:
            flags |= pygame.RESIZABLE

        self.screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        pygame.display.set_caption(self.config.title)

        # Timing
        self._clock = pygame.time.Clock()
        self._current_time = time.perf_counter()
        self._frame_count = 0
        self._fps = 0.0
        self._fps_update_time = 0.0

        # Debug info
        self.debug_mode = False

        if event_bus is not None:
            event_bus.subscribe(GameEvent.LEVEL_LOADED, self._on_level_loaded)

    @property
    def fps(self) -> float:
        """Current frames per second."""
        return self._fps

    def run(self) -> None:
        """Start the main loop."""
        self._running = True
        self._current_time = time.perf_counter()
        logger.info(f"Starting '{self.config.title}' at {self.config.target_fps} fps")

        while self._running:
            new_time = time.perf_counter()
            frame_time = new_time - self._current_time
            self._current_time = new_time

            self._process_events()
            self.tick(frame_time)

            self._update_fps()
            self._clock.tick(self.config.target_fps)

        self._shutdown()

    def tick(self, frame_time: float) -> None:
        """
        Run one frame.

        Args:
            frame_time: Seconds since the previous frame
        """
        # Prevent spiral of death after a stall
        frame_time = min(frame_time, self.config.max_frame_time)
        if self._paused:
            frame_time = 0.0

        self.simulation.update(frame_time, self.screen)
        pygame.display.flip()

    def quit(self) -> None:
        """Request shutdown."""
        self._running = False

    def pause(self) -> None:
        """Pause the simulation (frames are still drawn)."""
        self._paused = True

    def resume(self) -> None:
        """Resume the simulation."""
        self._paused = False

    def toggle_pause(self) -> None:
        """Toggle pause state."""
        self._paused = not self._paused

    def _process_events(self) -> None:
        """Process Pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.KEYDOWN:
                if not self.simulation.on_key_down(event.key):
                    self._on_unhandled_key(event.key)
            elif event.type == pygame.KEYUP:
                self.simulation.on_key_up(event.key)

    def _on_unhandled_key(self, key: int) -> None:
        """Shell-level keys the simulation did not claim."""
        if key == pygame.K_ESCAPE:
            self.quit()
        elif key == pygame.K_p:
            self.toggle_pause()
        elif key == pygame.K_F3:
            self.debug_mode = not self.debug_mode
            self._refresh_caption()

    def _on_level_loaded(self, event: Event) -> None:
        self.level = event["level"]
        self._refresh_caption()

    def _refresh_caption(self) -> None:
        """Window title with the level counter and, in debug mode, the FPS."""
        caption = self.config.title
        if self.level is not None:
            caption += f" | Level {self.level + 1}"
        if self.debug_mode:
            caption += f" | FPS: {self._fps:.1f}"
        pygame.display.set_caption(caption)

    def _update_fps(self) -> None:
        """Update FPS counter."""
        self._frame_count += 1
        current = time.perf_counter()

        if current - self._fps_update_time >= 1.0:
            self._fps = self._frame_count / (current - self._fps_update_time)
            self._frame_count = 0
            self._fps_update_time = current

            if self.debug_mode:
                self._refresh_caption()

    def _shutdown(self) -> None:
        """Clean shutdown."""
        logger.info("Shutting down")
        pygame.quit()
