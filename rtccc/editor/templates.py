"""Default element templates and the demo floorplan used by the editor."""

from __future__ import annotations

import uuid
from typing import Any

from rtccc.models.element import ELEMENT_MODELS, ElementBase
from rtccc.models.floorplan import Floorplan

# Starting values for newly placed elements, all lengths in mm
ELEMENT_DEFAULTS: dict[str, dict[str, Any]] = {
    "room": {
        "room_type": "Habitable",
        "x": 500.0,
        "y": 500.0,
        "width": 3000.0,
        "height": 3000.0,
        "area": 9.0,
        "ceiling_height": 2500.0,
    },
    "door": {
        "x": 1500.0,
        "y": 1500.0,
        "width": 915.0,
        "height": 100.0,
        "is_required_exit": True,
        "swing_direction": "LH",
    },
    "fixture": {
        "name": "Sink",
        "x": 4000.0,
        "y": 1000.0,
        "width": 500.0,
        "height": 500.0,
        "is_accessible": True,
        "clearance_width": 800.0,
        "clearance_depth": 1200.0,
    },
    "path": {
        "x": 0.0,
        "y": 3000.0,
        "width": 3000.0,
        "height": 1200.0,
        "path_width": 1200.0,
    },
}


def new_element_id(kind: str) -> str:
    """Return a fresh id such as ``door-3f2a9c0e1b7d``."""
    return f"{kind}-{uuid.uuid4().hex[:12]}"


def new_element(kind: str, **overrides: Any) -> ElementBase:
    """Build a validated element of *kind* from its template plus *overrides*.

    Raises ``KeyError`` for an unknown kind and
    ``pydantic.ValidationError`` for bad override values.
    """
    if kind not in ELEMENT_MODELS:
        raise KeyError(f"Unknown element kind: {kind}")

    data = {"id": new_element_id(kind), **ELEMENT_DEFAULTS[kind], **overrides}
    data["type"] = kind
    return ELEMENT_MODELS[kind].model_validate(data)


def demo_scenario() -> Floorplan:
    """A small plan that trips the area, ceiling and exit-width rules."""
    return Floorplan.model_validate(
        {
            "rooms": [
                {
                    "id": "demo-room-1",
                    "roomType": "Office",
                    "x": 1000,
                    "y": 1000,
                    "width": 2000,
                    "height": 2000,
                    "area": 4,
                    "ceilingHeight": 2200,
                }
            ],
            "doors": [
                {
                    "id": "demo-door-1",
                    "x": 3200,
                    "y": 1500,
                    "width": 800,
                    "height": 100,
                    "isRequiredExit": True,
                    "swingDirection": "LH",
                }
            ],
            "fixtures": [
                {
                    "id": "demo-fix-1",
                    "name": "Accessible Sink",
                    "x": 1200,
                    "y": 1200,
                    "width": 500,
                    "height": 500,
                    "isAccessible": True,
                    "clearanceWidth": 800,
                    "clearanceDepth": 1200,
                }
            ],
            "paths": [],
        }
    )
