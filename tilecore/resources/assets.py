"""
Asset loader.

Decodes images and level data from an asset directory described by
a `manifest.json`. Both the manifest and every level file are
validated against the JSON schemas shipped with this package.

Loading is fail-fast: any missing or invalid resource raises
AssetLoadError, so a game never starts half-initialised.

Manifest layout:
    {
        "images": {
            "avatar": {"path": "sprites/avatar.png"},
            "tiles_0": {"procedural": {"cell": [64, 64], "columns": 8,
                                       "colors": [null, [90, 70, 50]]}}
        },
        "atlases": ["tiles_0"],
        "levels": [{"id": "level_0", "path": "levels/level_0.json"}],
        "arrays": {"palette": [1, 2, 3]}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jsonschema
import numpy as np
import pygame

if TYPE_CHECKING:
    from tilecore.haptics.vibrator import Vibrator


SCHEMA_DIR = Path(__file__).parent / "schemas"


class AssetLoadError(RuntimeError):
    """A resource is missing, unreadable or invalid."""


@dataclass
class ResourceContext:
    """
    Everything a game needs from the platform at startup.

    Attributes:
        assets: Decoder for images and level data
        vibrator: Haptic device, or None when the platform has none
    """
    assets: AssetLoader
    vibrator: Vibrator | None = None


class AssetLoader:
    """
    Decodes resources declared in an asset manifest.
    """

    MANIFEST_NAME = "manifest.json"

    def __init__(self, root: Path | str):
        self._root = Path(root)
        self._schemas: dict[str, Any] = {}
        self._levels: dict[str, Path] = {}
        self.logger = logging.getLogger(__name__)

        self._load_schemas()
        self._manifest = self._load_json(
            self._root / self.MANIFEST_NAME, "manifest.schema.json"
        )
        for entry in self._manifest["levels"]:
            self._levels[entry["id"]] = self._root / entry["path"]

        missing = [a for a in self._manifest["atlases"] if a not in self._manifest["images"]]
        if missing:
            raise AssetLoadError(f"Atlases reference undeclared images: {missing}")

        self.logger.info(
            f"Asset manifest {self._root}: "
            f"{len(self._manifest['images'])} images, "
            f"{len(self.atlas_ids)} atlases, "
            f"{len(self.level_ids)} levels."
        )

    @property
    def root(self) -> Path:
        return self._root

    @property
    def image_ids(self) -> list[str]:
        return list(self._manifest["images"])

    @property
    def atlas_ids(self) -> list[str]:
        """Tile atlas image ids, in level order."""
        return list(self._manifest["atlases"])

    @property
    def level_ids(self) -> list[str]:
        """Level ids, in manifest order."""
        return [entry["id"] for entry in self._manifest["levels"]]

    @property
    def array_ids(self) -> list[str]:
        return list(self._manifest.get("arrays", {}))

    # Decoding

    def decode_image(self, image_id: str) -> pygame.Surface:
        """
        Decode an image resource.

        Args:
            image_id: Key in the manifest's "images" table

        Returns:
            The decoded surface

        Raises:
            AssetLoadError: If the image is undeclared or cannot be read
        """
        spec = self._manifest["images"].get(image_id)
        if spec is None:
            raise AssetLoadError(f"Unknown image: {image_id}")

        if "procedural" in spec:
            return self._build_procedural(image_id, spec["procedural"])

        path = self._root / spec["path"]
        if not path.exists():
            raise AssetLoadError(f"Image file not found: {path}")
        try:
            return pygame.image.load(str(path))
        except pygame.error as e:
            self.logger.error(f"Failed to decode image {path}: {e}")
            raise AssetLoadError(f"Failed to decode image {path}: {e}") from e

    def decode_level(self, level_id: str) -> list[int]:
        """
        Decode a level into its flat, row-major tile id array.

        Raises:
            AssetLoadError: If the level is undeclared, unreadable or invalid
        """
        path = self._levels.get(level_id)
        if path is None:
            raise AssetLoadError(f"Unknown level: {level_id}")

        data = self._load_json(path, "level.schema.json")
        tiles = list(data["tiles"])

        width = data.get("width")
        height = data.get("height")
        if width is not None and height is not None and width * height != len(tiles):
            raise AssetLoadError(
                f"Level {level_id} declares {width}x{height} tiles but has {len(tiles)}"
            )
        return tiles

    def decode_int_array(self, array_id: str) -> list[int]:
        """
        Decode an integer array declared inline in the manifest.

        Raises:
            AssetLoadError: If the array is undeclared
        """
        arrays = self._manifest.get("arrays", {})
        if array_id not in arrays:
            raise AssetLoadError(f"Unknown int array: {array_id}")
        return list(arrays[array_id])

    # Internals

    def _load_schemas(self) -> None:
        """Load the bundled JSON schemas."""
        for schema_file in SCHEMA_DIR.glob("*.schema.json"):
            with open(schema_file, 'r', encoding='utf-8') as f:
                self._schemas[schema_file.name] = json.load(f)

    def _load_json(self, path: Path, schema_name: str) -> dict[str, Any]:
        """Read a JSON file and validate it."""
        if not path.exists():
            raise AssetLoadError(f"File not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to load {path}: {e}")
            raise AssetLoadError(f"Failed to load {path}: {e}") from e

        try:
            jsonschema.validate(instance=data, schema=self._schemas[schema_name])
        except jsonschema.ValidationError as e:
            self.logger.error(f"Validation error in {path}: {e.message}")
            raise AssetLoadError(f"Validation error in {path}: {e.message}") from e

        return data

    def _build_procedural(self, image_id: str, spec: dict[str, Any]) -> pygame.Surface:
        """
        Build a sprite sheet of flat-coloured cells.

        Cell i (row-major, `columns` per row) is filled with colors[i];
        a null colour leaves the cell transparent.
        """
        cell_w, cell_h = spec["cell"]
        columns = spec["columns"]
        colors = spec["colors"]
        rows = (len(colors) + columns - 1) // columns

        data = np.zeros((rows * cell_h, columns * cell_w, 4), dtype=np.uint8)
        for index, color in enumerate(colors):
            if color is None:
                continue
            tx = (index % columns) * cell_w
            ty = (index // columns) * cell_h
            data[ty:ty + cell_h, tx:tx + cell_w, :3] = color[:3]
            data[ty:ty + cell_h, tx:tx + cell_w, 3] = color[3] if len(color) > 3 else 255

            # Darker border so neighbouring cells read as separate tiles
            shade = (np.array(color[:3], dtype=np.uint16) * 3 // 4).astype(np.uint8)
            data[ty, tx:tx + cell_w, :3] = shade
            data[ty + cell_h - 1, tx:tx + cell_w, :3] = shade
            data[ty:ty + cell_h, tx, :3] = shade
            data[ty:ty + cell_h, tx + cell_w - 1, :3] = shade

        self.logger.debug(f"Built procedural image {image_id} ({columns}x{rows} cells)")
        height, width = data.shape[:2]
        return pygame.image.frombytes(data.tobytes(), (width, height), "RGBA")
