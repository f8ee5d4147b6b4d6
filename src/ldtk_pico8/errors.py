"""Exceptions raised while converting an LDtk project into a cart."""

from __future__ import annotations

from pathlib import Path


class Pico8ConversionError(Exception):
    """Base class for every fatal conversion error."""


class ConfigurationError(Pico8ConversionError):
    """Raised for contradictory geometry, policy or project settings."""


class UnsupportedTransformError(Pico8ConversionError):
    """Raised when a tile placement is flipped or rotated."""


class OverlapConflictError(Pico8ConversionError):
    """Raised when sprite and map data both claim the shared memory region."""

    def __init__(self, gfx_rows: int, map_rows: int):
        super().__init__(
            'Overlap strategy "error" prevents merging shared map & sprite data: '
            f"Sprite data uses {gfx_rows} rows of shared pixel space, and "
            f"Map data uses {map_rows} rows of shared map space."
        )
        self.gfx_rows = gfx_rows
        self.map_rows = map_rows


class ResourceLoadError(Pico8ConversionError):
    """Raised when the project file or tileset image cannot be read."""

    def __init__(self, path: str | Path, message: str):
        super().__init__(message)
        self.path = Path(path)
