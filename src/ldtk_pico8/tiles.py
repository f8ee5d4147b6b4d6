"""Flatten LDtk tile layers into a single PICO-8 map grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import (
    CELL_SIZE,
    MAP_HEIGHT_PX,
    MAP_WIDTH_CELLS,
    MAP_WIDTH_PX,
    SPRITE_HEIGHT_PX,
    SPRITE_WIDTH_CELLS,
    SPRITE_WIDTH_PX,
)
from .diagnostics import Diagnostics
from .errors import ConfigurationError, UnsupportedTransformError
from .geometry import Rect, intersect_rects
from .ldtk import Layer, Tileset

MAP_CLIP = Rect(x=0, y=0, width=MAP_WIDTH_PX, height=MAP_HEIGHT_PX)
SPRITE_CLIP = Rect(x=0, y=0, width=SPRITE_WIDTH_PX, height=SPRITE_HEIGHT_PX)


def resolve_tileset(
    layers: Iterable[Layer], tilesets: Mapping[int, Tileset]
) -> Optional[Tileset]:
    """Find the single tileset every placement draws from.

    Returns ``None`` when no placement references a tileset.
    """

    def pick(current: Optional[Tileset], uid: Optional[int]) -> Optional[Tileset]:
        if uid is None:
            return current
        if current is not None:
            if current.uid == uid:
                return current
            raise ConfigurationError(
                "Cannot use multiple tilesets. Use a single tileset (representing "
                "the entire PICO-8 sprite sheet) for all layers and entities."
            )
        tileset = tilesets.get(uid)
        if tileset is None:
            raise ConfigurationError(f"Unknown tileset uid {uid}")
        if tileset.grid_size != CELL_SIZE:
            raise ConfigurationError(
                f"Tileset must have an {CELL_SIZE}px grid size for compatibility "
                f"with PICO-8 (got {tileset.grid_size}px)"
            )
        return tileset

    uids = (p.tileset_uid for layer in layers for p in layer.placements)
    return reduce(pick, uids, None)


def coord_to_index(x: int, y: int, width: int, scale: int = CELL_SIZE) -> int:
    """Flat cell index of the cell containing pixel ``(x, y)``."""
    return (y // scale) * width + (x // scale)


@dataclass(frozen=True)
class FlatTiles:
    """Sprite number per map cell, keyed by flat map cell index."""

    cells: Mapping[int, int]
    map_out_of_bounds: bool = False
    sprite_out_of_bounds: bool = False
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def to_values(self) -> List[Optional[int]]:
        if not self.cells:
            return []
        return [self.cells.get(i) for i in range(max(self.cells) + 1)]


def extract_flat_tiles(
    layers: Sequence[Layer],
    map_clip: Rect = MAP_CLIP,
    sprite_clip: Rect = SPRITE_CLIP,
) -> FlatTiles:
    """Resolve layered tile placements into one sprite number per map cell.

    ``layers`` are in LDtk's visual order (top first). They are processed in
    reverse so the topmost layer writes last and wins. Placements whose map
    or sprite position falls outside its clip (in pixels) are skipped.
    """
    map_area = intersect_rects(map_clip, MAP_CLIP)
    sprite_area = intersect_rects(sprite_clip, SPRITE_CLIP)

    cells: Dict[int, int] = {}
    map_out_of_bounds = False
    sprite_out_of_bounds = False

    for layer in reversed(layers):
        for placement in layer.placements:
            if placement.flip != 0:
                raise UnsupportedTransformError(
                    f'Cannot process flipped tiles in layer "{layer.identifier}". '
                    "Ensure there are no rules with flipping enabled."
                )

            map_x, map_y = placement.px
            sprite_x, sprite_y = placement.src
            if not map_area.contains(map_x, map_y):
                map_out_of_bounds = True
                continue
            if not sprite_area.contains(sprite_x, sprite_y):
                sprite_out_of_bounds = True
                continue

            cells[coord_to_index(map_x, map_y, MAP_WIDTH_CELLS)] = coord_to_index(
                sprite_x, sprite_y, SPRITE_WIDTH_CELLS
            )

    diagnostics = Diagnostics()
    if map_out_of_bounds:
        diagnostics.warn(f"Layer will be clipped to ({map_area.width}x{map_area.height}).")
    if sprite_out_of_bounds:
        diagnostics.warn(
            "Layer tile sits outside PICO-8 sprite area "
            f"({sprite_area.width}x{sprite_area.height})."
        )

    return FlatTiles(
        cells=cells,
        map_out_of_bounds=map_out_of_bounds,
        sprite_out_of_bounds=sprite_out_of_bounds,
        diagnostics=diagnostics,
    )
