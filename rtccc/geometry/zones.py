"""Derived hazard and clearance zones.

Both zones are axis-aligned approximations: a door's swing arc is taken
as the full square it sweeps through, and a fixture's clear floor space
as a rectangle centred on its footprint.  Rules only ever see the
resulting :class:`Bounds`, so exact arc geometry can replace these
functions without touching them.
"""

from __future__ import annotations

from typing import Protocol

from rtccc.geometry.bounds import Bounds, Placeable, bounds_of

# Rotation -> (x sign, y sign) of the quadrant the door leaf sweeps into,
# measured from the hinge anchor.  y grows downward.
_SWING_QUADRANTS: dict[int, tuple[int, int]] = {
    0: (1, 1),  # down-right
    90: (-1, 1),  # down-left
    180: (-1, -1),  # up-left
    270: (1, -1),  # up-right
}


class ClearanceShape(Placeable, Protocol):
    clearance_width: float
    clearance_depth: float


def swing_zone_of(door: Placeable) -> Bounds:
    """Square of side ``door.width`` swept by the leaf, placed by rotation.

    Handing (LH/RH) does not move the zone; rotation alone picks the
    quadrant.
    """
    rotation = getattr(door, "rotation", 0) or 0
    sx, sy = _SWING_QUADRANTS[rotation]
    side = door.width

    x0, x1 = sorted((door.x, door.x + sx * side))
    y0, y1 = sorted((door.y, door.y + sy * side))
    return Bounds(left=x0, top=y0, right=x1, bottom=y1)


def clearance_zone_of(fixture: ClearanceShape) -> Bounds:
    """Required clear floor space, centred on the fixture's footprint.

    The footprint is grown by half the surplus of clearance over physical
    size on each side.  Clearance width runs along the fixture's own
    width, so a 90/270 rotation turns the margins with the footprint.
    """
    footprint = bounds_of(fixture)
    dx = (fixture.clearance_width - fixture.width) / 2
    dy = (fixture.clearance_depth - fixture.height) / 2

    rotation = getattr(fixture, "rotation", 0) or 0
    if rotation in (90, 270):
        dx, dy = dy, dx
    return footprint.expanded(dx, dy)
