"""Rule catalog and the per-rule compliance predicates.

Each predicate is a pure function of one or two elements (the fixture
rule also takes the surrounding doors, paths and fixtures) and returns a
:class:`RuleResult`.  Predicates never look up thresholds themselves;
callers pass them in, defaulting to the code minimums in
:mod:`rtccc.config`.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from rtccc.config import (
    DEFAULT_MIN_CEILING_HEIGHT_MM,
    DEFAULT_MIN_EXIT_DOOR_WIDTH_MM,
    DEFAULT_MIN_ROOM_AREA_M2,
    OCCUPIABLE_ROOM_TYPES,
)
from rtccc.geometry import bounds_of, clearance_zone_of, intersects, swing_zone_of
from rtccc.models.element import Door, EgressPath, Fixture, Room

DOOR_WIDTH = "door_width"
ROOM_AREA = "room_area"
FIXTURE_CLEARANCE = "fixture_clearance"
CEILING_HEIGHT = "ceiling_height"
EGRESS_OBSTRUCTION = "egress_obstruction"


class Rule(BaseModel):
    """Catalog entry describing one knowledge rule."""

    key: str
    """Feature key, shared with building-code records: 'door_width', ..."""

    number: int
    """Knowledge-rule number (KR 1 to KR 5)."""

    category: str
    title: str
    threshold: float | None = None
    """Default minimum, or *None* for purely geometric rules."""

    unit: str = ""
    citation: str = ""
    """Logical form of the rule, quoted in reports."""


class RuleResult(BaseModel):
    """Verdict of a single predicate."""

    compliant: bool
    message: str = ""


RULES: dict[str, Rule] = {
    DOOR_WIDTH: Rule(
        key=DOOR_WIDTH,
        number=1,
        category="Fire Safety",
        title="Minimum egress door width",
        threshold=DEFAULT_MIN_EXIT_DOOR_WIDTH_MM,
        unit="mm",
        citation="IsRequiredExit(x) and Width(x, w) -> w >= 915",
    ),
    ROOM_AREA: Rule(
        key=ROOM_AREA,
        number=2,
        category="Space Planning",
        title="Minimum room area",
        threshold=DEFAULT_MIN_ROOM_AREA_M2,
        unit="m²",
        citation="Room(r) and Occupiable(r) -> Area(r) >= 9",
    ),
    FIXTURE_CLEARANCE: Rule(
        key=FIXTURE_CLEARANCE,
        number=3,
        category="Accessibility",
        title="Clear space around accessible fixtures",
        citation="IsAccessible(f) and IsObstruction(o) and OverlapsClearance(o, f) -> not Compliant(f)",
    ),
    CEILING_HEIGHT: Rule(
        key=CEILING_HEIGHT,
        number=4,
        category="Indoor Comfort",
        title="Minimum ceiling height",
        threshold=DEFAULT_MIN_CEILING_HEIGHT_MM,
        unit="mm",
        citation="Room(r) and Occupiable(r) -> CeilingHeight(r) >= 2400",
    ),
    EGRESS_OBSTRUCTION: Rule(
        key=EGRESS_OBSTRUCTION,
        number=5,
        category="Fire Safety",
        title="Clear egress path",
        citation="Door(d) and EgressPath(p) -> not Obstructs(d, p)",
    ),
}


def _fmt(value: float) -> str:
    """Render a measurement without a trailing '.0'."""
    return f"{value:g}"


def is_occupiable(room: Room) -> bool:
    """True if the room's type is subject to the area and height rules.

    Unlisted types (Corridor, Utility, Storage...) are exempt.
    """
    return room.room_type in OCCUPIABLE_ROOM_TYPES


# ---------------------------------------------------------------------------
# KR 1 (Fire safety): minimum egress door width
# ---------------------------------------------------------------------------


def check_door_width(
    door: Door,
    min_width: float = DEFAULT_MIN_EXIT_DOOR_WIDTH_MM,
) -> RuleResult:
    if not door.is_required_exit:
        return RuleResult(compliant=True, message="Not a required exit.")

    if door.width >= min_width:
        return RuleResult(compliant=True, message="Exit door width compliant.")
    return RuleResult(
        compliant=False,
        message=(
            f"Exit door too narrow ({_fmt(door.width)}mm, "
            f"minimum {_fmt(min_width)}mm)."
        ),
    )


# ---------------------------------------------------------------------------
# KR 2 (Space planning): minimum room area
# ---------------------------------------------------------------------------


def check_room_area(
    room: Room,
    min_area: float = DEFAULT_MIN_ROOM_AREA_M2,
) -> RuleResult:
    label = room.room_type
    if not is_occupiable(room):
        return RuleResult(compliant=True, message=f"{label} rooms are exempt.")

    if room.area >= min_area:
        return RuleResult(compliant=True, message=f"{label} area compliant.")
    return RuleResult(
        compliant=False,
        message=(
            f"{label} area too small ({_fmt(room.area)}m², "
            f"minimum {_fmt(min_area)}m²)."
        ),
    )


# ---------------------------------------------------------------------------
# KR 3 (Accessibility): clear space around fixtures
# ---------------------------------------------------------------------------


def check_fixture_clearance(
    fixture: Fixture,
    doors: Sequence[Door] = (),
    paths: Sequence[EgressPath] = (),
    fixtures: Sequence[Fixture] = (),
) -> RuleResult:
    """Check the fixture's clearance zone against every possible obstruction.

    Obstructions are egress paths, door swing zones and other fixtures,
    checked in that order; the first hit is reported.  Rooms are never
    obstructions: a fixture naturally sits inside its room.
    """
    if not fixture.is_accessible:
        return RuleResult(compliant=True, message="Fixture is not accessible-designated.")

    zone = clearance_zone_of(fixture)

    for path in paths:
        if intersects(zone, bounds_of(path)):
            return RuleResult(
                compliant=False,
                message=(
                    f"{fixture.name} accessibility clearance is blocked by "
                    f"egress path {path.id!r}."
                ),
            )

    for door in doors:
        if intersects(zone, swing_zone_of(door)):
            return RuleResult(
                compliant=False,
                message=(
                    f"{fixture.name} accessibility clearance is blocked by "
                    f"the swing of door {door.id!r}."
                ),
            )

    for other in fixtures:
        if other is fixture or other.id == fixture.id:
            continue
        if intersects(zone, bounds_of(other)):
            return RuleResult(
                compliant=False,
                message=(
                    f"{fixture.name} accessibility clearance is blocked by "
                    f"fixture {other.name!r}."
                ),
            )

    return RuleResult(compliant=True, message=f"{fixture.name} clearance is unobstructed.")


# ---------------------------------------------------------------------------
# KR 4 (Indoor comfort): minimum ceiling height
# ---------------------------------------------------------------------------


def check_ceiling_height(
    room: Room,
    min_height: float = DEFAULT_MIN_CEILING_HEIGHT_MM,
) -> RuleResult:
    if not is_occupiable(room):
        return RuleResult(compliant=True, message=f"{room.room_type} rooms are exempt.")

    if room.ceiling_height >= min_height:
        return RuleResult(compliant=True, message="Ceiling height meets standards.")
    return RuleResult(
        compliant=False,
        message=(
            f"Ceiling height is {_fmt(room.ceiling_height)}mm "
            f"(minimum {_fmt(min_height)}mm)."
        ),
    )


# ---------------------------------------------------------------------------
# KR 5 (Fire safety): clear egress path
# ---------------------------------------------------------------------------


def check_egress_obstruction(door: Door, path: EgressPath) -> RuleResult:
    if intersects(swing_zone_of(door), bounds_of(path)):
        return RuleResult(
            compliant=False,
            message=f"Door swing obstructs egress path {path.id!r}.",
        )
    return RuleResult(compliant=True, message="Path clear.")
