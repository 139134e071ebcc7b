"""Building-code records and the thresholds they configure.

A building code is stored by the surrounding CMS as::

    {"ruleName": "...", "featureKey": "door_width",
     "thresholdValue": 1000, "logicOperator": "gte"}

Only the three minimum rules carry a threshold.  The geometric rules
(fixture clearance, egress obstruction) are recognised but have nothing
to configure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from rtccc.compliance.rules import (
    CEILING_HEIGHT,
    DOOR_WIDTH,
    EGRESS_OBSTRUCTION,
    FIXTURE_CLEARANCE,
    ROOM_AREA,
)
from rtccc.config import (
    DEFAULT_MIN_CEILING_HEIGHT_MM,
    DEFAULT_MIN_EXIT_DOOR_WIDTH_MM,
    DEFAULT_MIN_ROOM_AREA_M2,
)

logger = logging.getLogger(__name__)

# Feature key -> RuleThresholds field
_THRESHOLD_FIELDS: dict[str, str] = {
    DOOR_WIDTH: "min_door_width_mm",
    ROOM_AREA: "min_room_area_m2",
    CEILING_HEIGHT: "min_ceiling_height_mm",
}

_GEOMETRIC_FEATURES = frozenset({FIXTURE_CLEARANCE, EGRESS_OBSTRUCTION})


class BuildingCodeError(ValueError):
    """Raised for a building-code record the engine cannot apply."""


class RuleThresholds(BaseModel):
    """Numeric minimums used by the reasoning loop."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min_door_width_mm: float = Field(default=DEFAULT_MIN_EXIT_DOOR_WIDTH_MM, gt=0)
    min_room_area_m2: float = Field(default=DEFAULT_MIN_ROOM_AREA_M2, gt=0)
    min_ceiling_height_mm: float = Field(default=DEFAULT_MIN_CEILING_HEIGHT_MM, gt=0)


class BuildingCode(BaseModel):
    """One configurable building-code rule."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rule_name: str
    feature_key: Literal[
        "door_width",
        "room_area",
        "fixture_clearance",
        "ceiling_height",
        "egress_obstruction",
    ]
    threshold_value: float | None = None
    logic_operator: Literal["gte", "lte", "neq"] | None = None


def parse_building_code(data: Any) -> BuildingCode:
    """Validate a raw building-code record, raising :class:`BuildingCodeError`."""
    if isinstance(data, BuildingCode):
        return data
    try:
        return BuildingCode.model_validate(data)
    except ValidationError as exc:
        raise BuildingCodeError(f"Invalid building code {data!r}: {exc}") from exc


def thresholds_from_codes(
    codes: Iterable[BuildingCode | dict[str, Any]],
    base: RuleThresholds | None = None,
) -> RuleThresholds:
    """Fold building-code records into a :class:`RuleThresholds`.

    Later records override earlier ones for the same feature.  Minimum
    rules only make sense with ``gte`` (or no operator); anything else,
    or a missing threshold, raises :class:`BuildingCodeError`.
    """
    updates: dict[str, float] = {}

    for raw in codes:
        code = parse_building_code(raw)

        if code.feature_key in _GEOMETRIC_FEATURES:
            logger.debug(
                "Building code %r (%s) has no threshold to apply",
                code.rule_name,
                code.feature_key,
            )
            continue

        if code.logic_operator not in (None, "gte"):
            raise BuildingCodeError(
                f"Building code {code.rule_name!r}: {code.feature_key} is a minimum "
                f"rule and needs operator 'gte', got {code.logic_operator!r}"
            )
        if code.threshold_value is None:
            raise BuildingCodeError(
                f"Building code {code.rule_name!r}: {code.feature_key} needs a thresholdValue"
            )

        updates[_THRESHOLD_FIELDS[code.feature_key]] = code.threshold_value

    current = base or RuleThresholds()
    try:
        return RuleThresholds(**{**current.model_dump(), **updates})
    except ValidationError as exc:
        raise BuildingCodeError(f"Building codes produce invalid thresholds: {exc}") from exc
