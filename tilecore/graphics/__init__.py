"""
Graphics module.

Exports:
- ViewTransform: World/screen conversion for a camera centred on a point
"""

from tilecore.graphics.camera import ViewTransform

__all__ = [
    "ViewTransform",
]
