"""
Input control definitions.

Controls abstract raw key codes into the avatar's control bits.
Game logic should test Controls, not raw keys. This enables:
- Key rebinding
- Several keys driving one control
- A single-word control state per frame

Usage:
    control = DEFAULT_KEY_BINDINGS.get(key_code, Control.NONE)
    state |= control
    if state & Control.JUMP:
        ...
"""

from enum import IntFlag

import pygame


class Control(IntFlag):
    """
    Avatar control bits.

    The avatar keeps the OR of all currently held controls.
    """

    NONE = 0

    # Movement
    LEFT = 1 << 0
    RIGHT = 1 << 1

    # Actions
    JUMP = 1 << 2
    FIRE = 1 << 3


# Default key bindings (can be customized)
DEFAULT_KEY_BINDINGS: dict[int, Control] = {
    # Movement
    pygame.K_LEFT: Control.LEFT,
    pygame.K_a: Control.LEFT,
    pygame.K_RIGHT: Control.RIGHT,
    pygame.K_d: Control.RIGHT,

    # Actions
    pygame.K_SPACE: Control.JUMP,
    pygame.K_UP: Control.JUMP,
    pygame.K_w: Control.JUMP,
    pygame.K_z: Control.JUMP,
    pygame.K_x: Control.FIRE,
    pygame.K_j: Control.FIRE,
    pygame.K_LCTRL: Control.FIRE,
}
