"""
Resources module.

Exports:
- AssetLoader: Decodes images and levels declared in an asset manifest
- AssetLoadError: Raised for any missing or invalid resource
- ResourceContext: Bundle of platform services handed to a game at startup
"""

from tilecore.resources.assets import AssetLoader, AssetLoadError, ResourceContext

__all__ = [
    "AssetLoader",
    "AssetLoadError",
    "ResourceContext",
]
