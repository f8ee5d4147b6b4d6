"""LDtk to PICO-8 cartridge converter.

Converts the first level of an LDtk project, its tileset and the tileset's
enum tags into the ``__map__``, ``__gfx__`` and ``__gff__`` sections of a
.p8 cart. It can be invoked through the CLI (``python -m ldtk_pico8``) or
imported to convert a project into cart text.
"""

from .converter import (
    ConversionResult,
    ConvertOptions,
    convert_ldtk_to_p8,
    convert_project,
    load_tileset_image,
)
from .errors import (
    ConfigurationError,
    OverlapConflictError,
    Pico8ConversionError,
    ResourceLoadError,
    UnsupportedTransformError,
)
from .ldtk import LdtkProject, load_ldtk_project
from .merge import OverlapPolicy, merge_shared_map_into_gfx
from .palette import PICO8_PALETTE, nearest_palette_index

__all__ = [
    "ConfigurationError",
    "ConversionResult",
    "ConvertOptions",
    "LdtkProject",
    "OverlapConflictError",
    "OverlapPolicy",
    "PICO8_PALETTE",
    "Pico8ConversionError",
    "ResourceLoadError",
    "UnsupportedTransformError",
    "convert_ldtk_to_p8",
    "convert_project",
    "load_ldtk_project",
    "load_tileset_image",
    "merge_shared_map_into_gfx",
    "nearest_palette_index",
]
