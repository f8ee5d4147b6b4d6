"""Assemble the .p8 text cartridge."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .constants import CART_HEADER, CART_VERSION

# Output order of the sections PICO-8 expects.
SECTION_ORDER = ("__lua__", "__gfx__", "__gff__", "__map__")


def write_p8_cart(
    gfx: Optional[Sequence[str]] = None,
    gff: Optional[Sequence[str]] = None,
    map: Optional[Sequence[str]] = None,
    lua: Optional[Sequence[str]] = None,
) -> str:
    """Join the given section rows under their headers.

    Empty or missing sections are left out entirely.
    """
    sections = {"__lua__": lua, "__gfx__": gfx, "__gff__": gff, "__map__": map}
    lines: List[str] = [CART_HEADER, f"version {CART_VERSION}"]
    for name in SECTION_ORDER:
        rows = sections[name]
        if rows:
            lines.append(name)
            lines.extend(rows)
    return "\n".join(lines)


def build_viewer_script(palt: int = 0) -> List[str]:
    """A small Lua program that scrolls around the converted map.

    When ``palt`` is not 0 the screen is cleared to that color and it is
    drawn as transparent instead of color 0.
    """
    lines = [
        "-- generated by ldtk-pico8",
        "cx = 0",
        "cy = 0",
        "",
        "function _update()",
        " if (btn(0)) cx -= 2",
        " if (btn(1)) cx += 2",
        " if (btn(2)) cy -= 2",
        " if (btn(3)) cy += 2",
        "end",
        "",
        "function _draw()",
    ]
    if palt == 0:
        lines.append(" cls(0)")
    else:
        lines += [
            f" cls({palt})",
            " palt(0,false)",
            f" palt({palt},true)",
        ]
    lines += [
        " camera(cx,cy)",
        " map(0,0,0,0,128,64)",
    ]
    if palt != 0:
        lines.append(" palt(0)")
    lines.append("end")
    return lines
