"""Quantize RGBA tileset pixels onto the fixed PICO-8 palette."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

with warnings.catch_warnings():
    # colour reports missing optional extras (scipy, matplotlib) on import
    warnings.simplefilter("ignore")
    import colour

from .constants import PALETTE_SIZE
from .diagnostics import Diagnostics
from .errors import ConfigurationError
from .geometry import Rect, intersect_rects

Color = Tuple[int, int, int]

PICO8_PALETTE: List[Color] = [
    (0, 0, 0),        # 0 black
    (29, 43, 83),     # 1 dark blue
    (126, 37, 83),    # 2 dark purple
    (0, 135, 81),     # 3 dark green
    (171, 82, 54),    # 4 brown
    (95, 87, 79),     # 5 dark grey
    (194, 195, 199),  # 6 light grey
    (255, 241, 232),  # 7 white
    (255, 0, 77),     # 8 red
    (255, 163, 0),    # 9 orange
    (255, 236, 39),   # 10 yellow
    (0, 228, 54),     # 11 green
    (41, 173, 255),   # 12 blue
    (131, 118, 156),  # 13 lavender
    (255, 119, 168),  # 14 pink
    (255, 204, 170),  # 15 light peach
]


def css_hex(rgb: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def rgb_to_lab(rgb: Sequence[Color] | Color) -> np.ndarray:
    """Convert 8-bit sRGB triplets to CIE Lab (D65)."""
    xyz = colour.sRGB_to_XYZ(np.asarray(rgb, dtype=np.float64) / 255.0)
    return colour.XYZ_to_Lab(xyz)


class PaletteMatcher:
    """Perceptual nearest-colour lookup against a fixed palette.

    Distances are CIE 2000 delta E in Lab space; on a tie the first palette
    entry wins.
    """

    def __init__(self, palette: Sequence[Color] = PICO8_PALETTE):
        self.palette = list(palette)
        self._palette_lab = rgb_to_lab(self.palette)

    def match(self, rgb: np.ndarray) -> np.ndarray:
        """Palette indices for an ``(..., 3)`` array of 8-bit colours.

        Entries whose distance could not be computed are ``-1``.
        """
        rgb = np.asarray(rgb)
        flat = rgb.reshape(-1, 3)
        if not len(flat):
            return np.zeros(rgb.shape[:-1], dtype=np.int64)

        unique_rgb, inverse = np.unique(flat, axis=0, return_inverse=True)
        lab = rgb_to_lab(unique_rgb)
        distances = np.asarray(
            colour.delta_E(lab[:, np.newaxis, :], self._palette_lab, method="CIE 2000"),
            dtype=np.float64,
        )
        indices = np.where(
            np.all(np.isfinite(distances), axis=-1), np.argmin(distances, axis=-1), -1
        )
        return indices[inverse.reshape(-1)].reshape(rgb.shape[:-1])

    def nearest(self, rgb: Color) -> Optional[int]:
        """Return the palette index closest to ``rgb``, or ``None`` if no
        distance could be computed."""
        index = int(self.match(np.asarray([rgb]))[0])
        return None if index < 0 else index


def nearest_palette_index(rgb: Color, palette: Sequence[Color] = PICO8_PALETTE) -> int:
    index = PaletteMatcher(palette).nearest(rgb)
    return 0 if index is None else index


@dataclass(frozen=True)
class QuantizedImage:
    """Palette indices addressed relative to the clip origin.

    ``width`` is the row width of the target area, which may be wider than
    the source image; coordinates the image did not cover are absent from
    ``pixels``.
    """

    width: int
    height: int
    pixels: Mapping[Tuple[int, int], int]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def get(self, x: int, y: int, default: Optional[int] = None) -> Optional[int]:
        return self.pixels.get((x, y), default)

    def to_values(self, default: int = 0) -> List[int]:
        """Flatten row-major, filling missing pixels with ``default``."""
        return [
            self.pixels.get((x, y), default)
            for y in range(self.height)
            for x in range(self.width)
        ]


def quantize_image(
    image: Image.Image,
    transparent_index: int,
    clip_rect: Rect,
    palette: Sequence[Color] = PICO8_PALETTE,
) -> QuantizedImage:
    """Map every pixel inside ``clip_rect`` to a palette index.

    Fully transparent pixels (alpha 0) become ``transparent_index``; any
    other alpha is treated as opaque.
    """
    if not 0 <= transparent_index < PALETTE_SIZE:
        raise ConfigurationError(
            f"Transparent color index must be between 0 and {PALETTE_SIZE - 1}, "
            f"got {transparent_index}"
        )

    diagnostics = Diagnostics()
    image = image.convert("RGBA")
    img_w, img_h = image.size

    region = intersect_rects(clip_rect, Rect(x=0, y=0, width=img_w, height=img_h))
    if region.width != img_w or region.height != img_h:
        diagnostics.warn(
            f"Tileset image ({img_w}x{img_h}) will be clipped to "
            f"({region.width}x{region.height})."
        )

    row_width = clip_rect.width if clip_rect.width is not None else region.width
    if region.width < row_width:
        diagnostics.info(
            f"Tileset image is narrower ({region.width}px) than the sprite sheet "
            f"({row_width}px); uncovered pixels default to color 0."
        )

    pixels: Dict[Tuple[int, int], int] = {}
    if region.width > 0 and region.height > 0:
        data = np.asarray(image)[region.y1 : region.y2, region.x1 : region.x2]
        opaque = data[..., 3] != 0
        indices = PaletteMatcher(palette).match(data[..., :3])

        for y, x in zip(*np.nonzero(opaque & (indices < 0))):
            rgb = tuple(int(c) for c in data[y, x, :3])
            diagnostics.warn(
                f"Found non PICO-8 color {css_hex(rgb)} at {x + region.x1},{y + region.y1}. "
                "Defaulting it to color 0."
            )
        indices = np.where(opaque, np.maximum(indices, 0), transparent_index)

        for (y, x), index in np.ndenumerate(indices):
            pixels[(x, y)] = int(index)

    return QuantizedImage(
        width=row_width,
        height=max(region.height, 0),
        pixels=pixels,
        diagnostics=diagnostics,
    )
