"""
Haptic feedback through gamepad rumble.
"""

from __future__ import annotations

import logging

import pygame


class Vibrator:
    """
    Fire-and-forget rumble on every connected gamepad.

    Rumble runs on the device; `vibrate` returns immediately and never
    raises. A machine with no gamepad simply does nothing.
    """

    def __init__(self, low_frequency: float = 0.6, high_frequency: float = 1.0):
        self.low_frequency = max(0.0, min(1.0, low_frequency))
        self.high_frequency = max(0.0, min(1.0, high_frequency))
        self._gamepads: dict[int, pygame.joystick.JoystickType] = {}
        self._initialized = False

    def init(self) -> None:
        """Initialise the joystick subsystem and pick up connected pads."""
        try:
            pygame.joystick.init()
            self._initialized = True
            self.refresh()
        except pygame.error as e:
            logging.error(f"Failed to initialize haptics: {e}")

    def refresh(self) -> None:
        """Refresh connected gamepads (call on device added/removed)."""
        if not self._initialized:
            return
        self._gamepads.clear()
        for i in range(pygame.joystick.get_count()):
            joy = pygame.joystick.Joystick(i)
            joy.init()
            self._gamepads[joy.get_instance_id()] = joy
        logging.info(f"Haptics: {len(self._gamepads)} gamepad(s) connected.")

    @property
    def device_count(self) -> int:
        return len(self._gamepads)

    def vibrate(self, duration_ms: int) -> None:
        """
        Rumble all gamepads.

        Args:
            duration_ms: Pulse length in milliseconds
        """
        if duration_ms <= 0:
            return
        for joy in self._gamepads.values():
            try:
                joy.rumble(self.low_frequency, self.high_frequency, duration_ms)
            except pygame.error as e:
                logging.warning(f"Rumble failed on gamepad {joy.get_instance_id()}: {e}")
