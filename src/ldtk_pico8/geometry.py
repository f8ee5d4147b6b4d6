"""Rectangle clipping shared by every region-bounded operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

_INF = float("inf")


@dataclass(frozen=True)
class Rect:
    """A partially specified rectangle.

    Any field left as ``None`` defers to the other operand of
    :func:`intersect_rects`.
    """

    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class Intersection:
    x1: int
    y1: int
    x2: int
    y2: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x1 <= x < self.x2 and self.y1 <= y < self.y2


def intersect_rects(r1: Rect | None = None, r2: Rect | None = None) -> Intersection:
    """Intersect two rects, each axis bound optional on either side.

    Raises :class:`ConfigurationError` when neither rect bounds a dimension.
    """
    r1 = r1 or Rect()
    r2 = r2 or Rect()

    if r1.width is None and r2.width is None:
        raise ConfigurationError("At least one rect must specify a width")
    if r1.height is None and r2.height is None:
        raise ConfigurationError("At least one rect must specify a height")
    if r1.x is None and r2.x is None:
        raise ConfigurationError("At least one rect must specify an x value")
    if r1.y is None and r2.y is None:
        raise ConfigurationError("At least one rect must specify a y value")

    r1x = -_INF if r1.x is None else r1.x
    r1y = -_INF if r1.y is None else r1.y
    r2x = -_INF if r2.x is None else r2.x
    r2y = -_INF if r2.y is None else r2.y
    r1w = _INF if r1.width is None else r1.width
    r1h = _INF if r1.height is None else r1.height
    r2w = _INF if r2.width is None else r2.width
    r2h = _INF if r2.height is None else r2.height

    x1 = max(r1x, r2x)
    y1 = max(r1y, r2y)
    x2 = min(r1x + r1w, r2x + r2w)
    y2 = min(r1y + r1h, r2y + r2h)

    # A width without an origin on one side and an origin without a width on
    # the other still leaves the far edge unbounded.
    if _INF in (abs(x1), abs(y1), abs(x2), abs(y2)):
        raise ConfigurationError(f"Rect intersection of {r1} and {r2} is unbounded")

    return Intersection(
        x1=int(x1), y1=int(y1), x2=int(x2), y2=int(y2),
        width=int(x2 - x1), height=int(y2 - y1),
    )
