"""Plan elements: the typed records a floorplan is made of.

Every element is a rectangle anchored at its top-left corner ``(x, y)``
with ``width`` x ``height`` extents in millimetres, optionally turned by a
quarter-turn ``rotation``.  The ``type`` field is the discriminator the
editor writes into its JSON, so a persisted record can be routed back to
the right model.

Python attribute names are snake_case; the editor's camelCase names
(``roomType``, ``isRequiredExit``...) are accepted and emitted as aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from rtccc.config import VALID_ROTATIONS


class RoomType(str, Enum):
    """Room classifications the editor offers.

    ``Room.room_type`` is not restricted to these: any other label is a
    valid room that the space-planning rules treat as exempt.
    """

    OFFICE = "Office"
    HABITABLE = "Habitable"
    BEDROOM = "Bedroom"
    LIVING = "Living"
    CORRIDOR = "Corridor"
    UTILITY = "Utility"


class SwingDirection(str, Enum):
    """Door handing: left-hand or right-hand swing."""

    LH = "LH"
    RH = "RH"


class ElementBase(BaseModel):
    """Fields shared by every plan element."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    type: str
    """Discriminator written by the editor: 'room', 'door', 'fixture' or 'path'."""

    id: str = Field(min_length=1)
    x: float
    y: float
    width: float
    height: float
    rotation: Literal[0, 90, 180, 270] = 0
    """Quarter-turn rotation in degrees.  Missing or null means 0."""

    @field_validator("rotation", mode="before")
    @classmethod
    def _normalise_rotation(cls, value: Any) -> Any:
        if value is None:
            return 0
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool):
            value = value % 360
            if value not in VALID_ROTATIONS:
                raise ValueError(
                    f"rotation must be one of {VALID_ROTATIONS}, got {value}"
                )
        return value


class Room(ElementBase):
    """An enclosed space.  ``area`` is stored, not derived from the extents."""

    type: Literal["room"] = "room"
    room_type: str = Field(min_length=1)
    """Free-form label, e.g. 'Office' or 'Corridor' (see :class:`RoomType`)."""

    area: float
    """Floor area in m²."""

    ceiling_height: float
    """Finished ceiling height in mm."""

    @field_validator("room_type", mode="before")
    @classmethod
    def _unwrap_room_type(cls, value: Any) -> Any:
        if isinstance(value, RoomType):
            return value.value
        return value


class Door(ElementBase):
    """A door leaf.  ``width`` is the clear opening, ``height`` the frame thickness."""

    type: Literal["door"] = "door"
    is_required_exit: bool
    swing_direction: SwingDirection = SwingDirection.LH


class Fixture(ElementBase):
    """A plumbing or furniture fixture with a required clear floor space."""

    type: Literal["fixture"] = "fixture"
    name: str
    is_accessible: bool
    clearance_width: float
    clearance_depth: float


class EgressPath(ElementBase):
    """A designated exit route.  ``width`` is its length along the route."""

    type: Literal["path"] = "path"
    path_width: float
    """Logical egress width in mm; the editor keeps ``height`` equal to it."""


PlanElement = Annotated[
    Union[Room, Door, Fixture, EgressPath],
    Field(discriminator="type"),
]

ELEMENT_MODELS: dict[str, type[ElementBase]] = {
    "room": Room,
    "door": Door,
    "fixture": Fixture,
    "path": EgressPath,
}

_element_adapter: TypeAdapter[Any] = TypeAdapter(PlanElement)


def parse_element(data: dict[str, Any]) -> Room | Door | Fixture | EgressPath:
    """Validate a single tagged element record (must carry ``type``).

    Raises ``pydantic.ValidationError`` on malformed input.
    """
    return _element_adapter.validate_python(data)
