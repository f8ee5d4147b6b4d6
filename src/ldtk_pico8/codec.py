"""Hex digit encoding and row shaping for .p8 data sections.

Every data section of a .p8 cart is a block of fixed-width rows made of
hexadecimal digits ("nibbles"). The helpers here turn integers into digit
strings, chop digit strings into rows and drop the trailing all-zero rows
PICO-8 itself leaves out when saving a cart.
See: https://pico-8.fandom.com/wiki/P8FileFormat
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def to_hex(value: int, nibbles: int) -> str:
    """Format ``value`` as exactly ``nibbles`` lowercase hex digits.

    Values that do not fit wrap around (``value mod 16**nibbles``).
    """
    return format(value + (1 << (nibbles * 4)), "x")[-nibbles:]


def encode_values(
    values: Iterable[Optional[int]], nibbles: int, default: int = 0
) -> str:
    """Encode integers as a flat digit string, ``nibbles`` digits each.

    ``None`` and negative entries are replaced by ``default`` (itself clamped
    to zero) before encoding.
    """
    out = []
    for value in values:
        if value is None or value < 0:
            value = default
        out.append(to_hex(max(value, 0), nibbles))
    return "".join(out)


def decode_values(data: str, nibbles: int) -> List[int]:
    if len(data) % nibbles != 0:
        raise ValueError(
            f"Data length {len(data)} is not a multiple of {nibbles} digit(s)"
        )
    if any(c not in _HEX_DIGITS for c in data):
        raise ValueError("Data contains non-hexadecimal characters")
    return [int(data[i : i + nibbles], 16) for i in range(0, len(data), nibbles)]


def split_lines(data: str, chars_per_line: int) -> List[str]:
    """Chop ``data`` into rows of ``chars_per_line`` digits.

    A partial final row is padded on the right with ``"0"``.
    """
    lines = [data[i : i + chars_per_line] for i in range(0, len(data), chars_per_line)]
    if lines and len(lines[-1]) < chars_per_line:
        lines[-1] = lines[-1].ljust(chars_per_line, "0")
    return lines


def join_lines(lines: Sequence[str]) -> str:
    return "".join(lines)


def trim_data(data: str, chars_per_line: int) -> str:
    """Strip trailing runs of ``chars_per_line`` zeros from ``data``.

    Only whole runs are removed; fewer than ``chars_per_line`` trailing zeros
    are kept.
    """
    trailing = len(data) - len(data.rstrip("0"))
    return data[: len(data) - (trailing // chars_per_line) * chars_per_line]


def trim_lines(lines: Sequence[str], chars_per_line: int) -> List[str]:
    return split_lines(trim_data(join_lines(lines), chars_per_line), chars_per_line)


def swap_nibble_pairs(data: str) -> str:
    """Swap every adjacent pair of digits (``"12ab"`` -> ``"21ba"``).

    Map cells are bytes written high nibble first, while the sprite sheet
    stores the low (left) pixel in the low nibble, so a map row read back as
    pixels has each digit pair reversed.
    """
    return re.sub(r"(.)(.)", r"\2\1", data)
