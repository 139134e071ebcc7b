"""Spatial primitives: bounding boxes, intersection, door and fixture zones."""

from rtccc.geometry.bounds import Bounds, Placeable, bounds_of, intersects
from rtccc.geometry.zones import clearance_zone_of, swing_zone_of

__all__ = [
    "Bounds",
    "Placeable",
    "bounds_of",
    "clearance_zone_of",
    "intersects",
    "swing_zone_of",
]
