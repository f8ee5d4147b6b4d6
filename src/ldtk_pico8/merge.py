"""Reconcile the memory PICO-8 shares between the sprite sheet and the map.

The bottom 64 pixel rows of the sprite sheet (sprites 128-255) and the
bottom 32 cell rows of the map are the same 4 KiB of memory. Each 256-digit
map row occupies two 128-digit sprite sheet rows once its digit pairs are
swapped back into pixel order.

Policies for when both sides have data there:

* ``error``: refuse to merge.
* ``map``: map data overwrites sprite pixels in the shared rows.
* ``sprite``: sprite pixels are kept; map data only fills rows past them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from .codec import join_lines, split_lines, swap_nibble_pairs, trim_lines
from .constants import (
    GFX_ROW_CHARS,
    GFX_SHARED_ROWS_FROM,
    MAP_ROW_CHARS,
    MAP_SHARED_ROWS_FROM,
)
from .diagnostics import Diagnostics
from .errors import ConfigurationError, OverlapConflictError


class OverlapPolicy(Enum):
    ERROR = "error"
    MAP = "map"
    SPRITE = "sprite"

    @classmethod
    def parse(cls, value: "str | OverlapPolicy") -> "OverlapPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ConfigurationError(
                f'Unknown sprite/map merge strategy "{value}" '
                f"(expected one of: {', '.join(p.value for p in cls)})"
            ) from exc


@dataclass(frozen=True)
class MergeResult:
    gfx_lines: List[str]
    map_lines: List[str]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def map_lines_as_gfx(map_lines: Sequence[str]) -> List[str]:
    """Reinterpret map rows as the sprite sheet rows they occupy."""
    return split_lines(swap_nibble_pairs(join_lines(map_lines)), GFX_ROW_CHARS)


def merge_shared_map_into_gfx(
    gfx_lines: Sequence[str],
    map_lines: Sequence[str],
    policy: "str | OverlapPolicy" = OverlapPolicy.ERROR,
) -> MergeResult:
    """Move map rows 32+ into sprite sheet rows 64+ according to ``policy``.

    When the map has no rows past row 32 both inputs come back unchanged;
    otherwise both outputs are trimmed of trailing all-zero rows and the map
    keeps at most its first 32 rows.
    """
    policy = OverlapPolicy.parse(policy)
    diagnostics = Diagnostics()

    if len(map_lines) <= MAP_SHARED_ROWS_FROM:
        # Nothing to merge
        return MergeResult(list(gfx_lines), list(map_lines), diagnostics)

    map_in = trim_lines(map_lines, MAP_ROW_CHARS)
    gfx_out = trim_lines(gfx_lines, GFX_ROW_CHARS)

    shared_gfx_rows = len(gfx_out) - GFX_SHARED_ROWS_FROM
    shared_map_rows = len(map_in) - MAP_SHARED_ROWS_FROM
    overlapping = shared_gfx_rows > 0 and shared_map_rows > 0
    if policy is OverlapPolicy.ERROR and overlapping:
        raise OverlapConflictError(gfx_rows=shared_gfx_rows, map_rows=shared_map_rows)

    # pad out the sprite sheet so the map rows land at the shared offset
    empty_row = "0" * GFX_ROW_CHARS
    gfx_out.extend(empty_row for _ in range(GFX_SHARED_ROWS_FROM - len(gfx_out)))

    shared = map_lines_as_gfx(map_in[MAP_SHARED_ROWS_FROM:])

    if policy is OverlapPolicy.SPRITE:
        if overlapping:
            diagnostics.info(
                'Using "sprite" overlap strategy; sprite data will be kept where it '
                "overlaps map data in the shared space."
            )
        gfx_out.extend(shared[len(gfx_out) - GFX_SHARED_ROWS_FROM :])
    else:
        # MAP, or ERROR with one side of the shared space unused
        if overlapping:
            diagnostics.info(
                'Using "map" overlap strategy; map data will overwrite sprite data '
                "in the shared space."
            )
        end = GFX_SHARED_ROWS_FROM + len(shared)
        gfx_out[GFX_SHARED_ROWS_FROM:end] = shared

    # The remaining map data is everything before the shared area
    map_out = trim_lines(map_in[:MAP_SHARED_ROWS_FROM], MAP_ROW_CHARS)
    gfx_out = trim_lines(gfx_out, GFX_ROW_CHARS)
    return MergeResult(gfx_out, map_out, diagnostics)
