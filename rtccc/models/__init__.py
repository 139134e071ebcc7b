"""Plan element and floorplan models."""

from rtccc.models.element import (
    Door,
    EgressPath,
    ElementBase,
    Fixture,
    PlanElement,
    Room,
    RoomType,
    SwingDirection,
    parse_element,
)
from rtccc.models.floorplan import (
    Floorplan,
    FloorplanValidationError,
    InvalidRecord,
    load_floorplan,
    partition_records,
    save_floorplan,
)

__all__ = [
    "Door",
    "EgressPath",
    "ElementBase",
    "Fixture",
    "Floorplan",
    "FloorplanValidationError",
    "InvalidRecord",
    "PlanElement",
    "Room",
    "RoomType",
    "SwingDirection",
    "load_floorplan",
    "parse_element",
    "partition_records",
    "save_floorplan",
]
