"""Axis-aligned bounding boxes in plan coordinates.

Pure box math on anything with a position and extents; no knowledge of
rooms, doors or rules.  The y axis points down, as on the editor canvas,
so ``top < bottom``.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict


class Placeable(Protocol):
    """Anything with a top-left anchor and axis-aligned extents."""

    x: float
    y: float
    width: float
    height: float


class Bounds(BaseModel):
    """Axis-aligned bounding box ``{left, top, right, bottom}``."""

    model_config = ConfigDict(frozen=True)

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def expanded(self, dx: float, dy: float) -> Bounds:
        """Grow the box by *dx* on the left and right, *dy* on top and bottom."""
        return Bounds(
            left=self.left - dx,
            top=self.top - dy,
            right=self.right + dx,
            bottom=self.bottom + dy,
        )


def bounds_of(shape: Placeable) -> Bounds:
    """Return the footprint of *shape*, honouring quarter-turn rotation.

    A rotation of 90 or 270 degrees swaps width and height about the fixed
    top-left anchor.  This pivots the footprint rather than turning it
    about its centroid, so it is only exact for square shapes.
    """
    rotation = getattr(shape, "rotation", 0) or 0
    w, h = shape.width, shape.height
    if rotation in (90, 270):
        w, h = h, w
    return Bounds(left=shape.x, top=shape.y, right=shape.x + w, bottom=shape.y + h)


def intersects(a: Bounds, b: Bounds) -> bool:
    """Strict AABB overlap.  Boxes that only share an edge do not intersect."""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )
