"""Core conversion pipeline: LDtk project -> .p8 cartridge text."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from PIL import Image

from .cart import build_viewer_script, write_p8_cart
from .codec import encode_values, split_lines, trim_data
from .constants import (
    GFX_MAX_CHARS,
    GFX_NIBBLES,
    GFX_ROW_CHARS,
    MAP_NIBBLES,
    MAP_ROW_CHARS,
    PALETTE_SIZE,
)
from .diagnostics import Diagnostics
from .errors import ConfigurationError, ResourceLoadError
from .flags import encode_enum_flags, flags_to_lines
from .ldtk import LdtkProject, Tileset, extract_palt, load_ldtk_project, select_level
from .merge import OverlapPolicy, merge_shared_map_into_gfx
from .palette import quantize_image
from .tiles import SPRITE_CLIP, FlatTiles, extract_flat_tiles, resolve_tileset

ImageLoader = Callable[[Path], Image.Image]


@dataclass
class ConvertOptions:
    """Options for a single conversion run."""

    overlap_policy: OverlapPolicy = OverlapPolicy.ERROR
    include_script: bool = True


@dataclass(frozen=True)
class ConversionResult:
    cart: str
    gfx_lines: List[str]
    gff_lines: List[str]
    map_lines: List[str]
    palt: int = 0
    tileset: Optional[Tileset] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def load_tileset_image(path: str | Path) -> Image.Image:
    path = Path(path)
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except FileNotFoundError as exc:
        raise ResourceLoadError(path, f"Tileset image not found: {path}") from exc
    except OSError as exc:
        raise ResourceLoadError(path, f"Failed to read tileset image: {path}") from exc


def tileset_to_gfx_lines(
    image: Image.Image, palt: int
) -> Tuple[List[str], Diagnostics]:
    """Quantize a tileset image into trimmed ``__gfx__`` rows."""
    quantized = quantize_image(image, palt, SPRITE_CLIP)
    data = encode_values(quantized.to_values(0), GFX_NIBBLES)
    # Clip data to maximum allowed by PICO-8
    data = trim_data(data[:GFX_MAX_CHARS], GFX_ROW_CHARS)
    return split_lines(data, GFX_ROW_CHARS), quantized.diagnostics


def flat_tiles_to_map_lines(flat_tiles: FlatTiles) -> List[str]:
    data = encode_values(flat_tiles.to_values(), MAP_NIBBLES)
    return split_lines(trim_data(data, MAP_ROW_CHARS), MAP_ROW_CHARS)


def convert_project(
    project: LdtkProject,
    options: ConvertOptions | None = None,
    image_loader: ImageLoader = load_tileset_image,
) -> ConversionResult:
    options = options or ConvertOptions()
    policy = OverlapPolicy.parse(options.overlap_policy)
    diagnostics = Diagnostics()

    selection = select_level(project)
    diagnostics.extend(selection.diagnostics)

    palt = extract_palt(selection.level)
    if palt is None:
        palt = 0
    if not 0 <= palt < PALETTE_SIZE:
        raise ConfigurationError(
            f"Transparent color (pico8_palt) must be between 0 and {PALETTE_SIZE - 1}, got {palt}"
        )

    tileset = resolve_tileset(selection.layers, project.tilesets)

    flat_tiles = extract_flat_tiles(selection.layers)
    diagnostics.extend(flat_tiles.diagnostics)
    map_lines = flat_tiles_to_map_lines(flat_tiles)

    gfx_lines: List[str] = []
    gff_lines: List[str] = []
    if tileset is not None:
        if tileset.rel_path:
            image = image_loader(project.base_dir / tileset.rel_path)
            gfx_lines, gfx_diagnostics = tileset_to_gfx_lines(image, palt)
            diagnostics.extend(gfx_diagnostics)
        else:
            diagnostics.warn(
                f'Tileset "{tileset.identifier}" has no image; no sprite data will be written.'
            )

        flags = encode_enum_flags(tileset.enum_tags, tileset.c_wid, tileset.c_hei)
        diagnostics.extend(flags.diagnostics)
        gff_lines = flags_to_lines(flags.values)

    merged = merge_shared_map_into_gfx(gfx_lines, map_lines, policy)
    diagnostics.extend(merged.diagnostics)

    lua_lines = build_viewer_script(palt) if options.include_script else None
    cart = write_p8_cart(
        gfx=merged.gfx_lines,
        gff=gff_lines,
        map=merged.map_lines,
        lua=lua_lines,
    )

    return ConversionResult(
        cart=cart,
        gfx_lines=merged.gfx_lines,
        gff_lines=gff_lines,
        map_lines=merged.map_lines,
        palt=palt,
        tileset=tileset,
        diagnostics=diagnostics,
    )


def convert_ldtk_to_p8(
    path: str | Path, options: ConvertOptions | None = None
) -> ConversionResult:
    return convert_project(load_ldtk_project(path), options)
