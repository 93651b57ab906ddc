"""
Haptics module.

Exports:
- Vibrator: Fire-and-forget gamepad rumble
"""

from tilecore.haptics.vibrator import Vibrator

__all__ = [
    "Vibrator",
]
