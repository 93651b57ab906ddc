"""
Entity kinds.

Provides:
- Avatar: the player
- Enemy: avatar-chasing walker
- Fire: projectile
- Blood: decorative particle
"""

from platformer.entities.avatar import Avatar
from platformer.entities.enemy import Enemy
from platformer.entities.fire import Fire
from platformer.entities.blood import Blood

__all__ = [
    "Avatar",
    "Enemy",
    "Fire",
    "Blood",
]
