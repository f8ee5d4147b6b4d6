"""Tileset enum tags to PICO-8 sprite flags (``__gff__``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .codec import encode_values, split_lines, trim_lines
from .constants import (
    FLAGS_NIBBLES,
    FLAGS_ROW_CHARS,
    MAX_SPRITE_FLAGS,
    SPRITE_HEIGHT_CELLS,
    SPRITE_WIDTH_CELLS,
)
from .diagnostics import Diagnostics
from .geometry import Rect, intersect_rects
from .ldtk import EnumTag

SPRITE_CELL_CLIP = Rect(x=0, y=0, width=SPRITE_WIDTH_CELLS, height=SPRITE_HEIGHT_CELLS)


@dataclass(frozen=True)
class SpriteFlags:
    width: int
    height: int
    values: Tuple[int, ...]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def encode_enum_flags(
    enum_tags: Sequence[EnumTag],
    tileset_width: int,
    tileset_height: int,
    clip_rect: Rect = SPRITE_CELL_CLIP,
) -> SpriteFlags:
    """Turn tagged tile ids into one flag bitmask per sprite.

    Tag ``n`` sets bit ``1 << n`` on every tile it lists. For example::

        [Ground: [1, 2], Spikes: [], Grass: [2, 4], Player: [5]]

    gives ``[0, 1, 5, 0, 4, 8]`` followed by zeros.

    Tiles are only dropped when they lie past the clip's far edges.
    """
    diagnostics = Diagnostics()
    area = intersect_rects(clip_rect, Rect(x=0, y=0, width=tileset_width, height=tileset_height))
    width = max(area.width, 0)
    height = max(area.height, 0)

    if len(enum_tags) > MAX_SPRITE_FLAGS:
        dropped = ", ".join(tag.name for tag in enum_tags[MAX_SPRITE_FLAGS:])
        diagnostics.warn(
            f"Skipping tileset enums after the first {MAX_SPRITE_FLAGS}; PICO-8 can only "
            f"have up to {MAX_SPRITE_FLAGS} sprite flags. (dropped: {dropped})"
        )

    accumulated: Dict[int, int] = {}
    if tileset_width > 0:
        for bit, tag in enumerate(enum_tags[:MAX_SPRITE_FLAGS]):
            for tile_id in tag.tile_ids:
                tile_x = tile_id % tileset_width
                tile_y = tile_id // tileset_width
                # Only the far edges are checked; clips currently start at 0,0.
                if tile_x < area.x2 and tile_y < area.y2:
                    index = (tile_y - area.y1) * width + (tile_x - area.x1)
                    accumulated[index] = accumulated.get(index, 0) | (1 << bit)

    return SpriteFlags(
        width=width,
        height=height,
        values=tuple(accumulated.get(i, 0) for i in range(width * height)),
        diagnostics=diagnostics,
    )


def flags_to_lines(values: Sequence[int]) -> List[str]:
    """Encode flag values as trimmed ``__gff__`` rows."""
    data = encode_values(values, FLAGS_NIBBLES)
    return trim_lines(split_lines(data, FLAGS_ROW_CHARS), FLAGS_ROW_CHARS)
