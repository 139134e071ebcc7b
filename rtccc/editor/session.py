"""FloorplanSession: the editing state behind the canvas.

Holds the current floorplan and re-runs the compliance engine after every
mutation, so :attr:`FloorplanSession.violations` always describes the plan
as it is now.  Also owns the editing conventions the engine deliberately
does not enforce: square rooms sized from their area, and egress paths
drawn as thick as their logical width.
"""

from __future__ import annotations

import logging
import math
from typing import Any, cast

from rtccc.compliance.engine import ComplianceEngine
from rtccc.compliance.report import ComplianceReport, Violation
from rtccc.editor.templates import demo_scenario, new_element
from rtccc.models.element import Door, EgressPath, ElementBase, Fixture, Room
from rtccc.models.floorplan import Floorplan

logger = logging.getLogger(__name__)

_COLLECTION_FOR_KIND = {
    "room": "rooms",
    "door": "doors",
    "fixture": "fixtures",
    "path": "paths",
}


class FloorplanSession:
    """Mutable floorplan with live compliance results.

    Parameters
    ----------
    floorplan:
        Initial plan.  Copied, so the caller's object is never mutated.
    engine:
        Engine used for re-evaluation.  Defaults to code thresholds.
    """

    def __init__(
        self,
        floorplan: Floorplan | None = None,
        engine: ComplianceEngine | None = None,
    ) -> None:
        self.engine = engine or ComplianceEngine()
        self._floorplan = floorplan.model_copy(deep=True) if floorplan else Floorplan()
        self.violations: list[Violation] = []
        self._recompute()

    # -- State -------------------------------------------------------------

    @property
    def floorplan(self) -> Floorplan:
        return self._floorplan

    @property
    def status(self) -> str:
        return self.report().status

    def snapshot(self) -> Floorplan:
        """Independent deep copy of the current plan, e.g. for saving."""
        return self._floorplan.model_copy(deep=True)

    def report(self) -> ComplianceReport:
        return ComplianceReport(violations=list(self.violations))

    def load(self, floorplan: Floorplan) -> None:
        """Replace the whole plan."""
        self._floorplan = floorplan.model_copy(deep=True)
        logger.info(
            "Loaded floorplan with %d element(s)", sum(1 for _ in self._floorplan.elements())
        )
        self._recompute()

    def load_data(self, data: Any) -> None:
        """Replace the plan from raw stored data, validating it first."""
        self.load(Floorplan.from_data(data))

    def load_demo_scenario(self) -> None:
        self.load(demo_scenario())
        logger.info("Loaded demo scenario")

    def clear(self) -> None:
        self.load(Floorplan())

    # -- Element operations ------------------------------------------------

    def add_room(self, **overrides: Any) -> Room:
        return cast(Room, self._add("room", overrides))

    def add_door(self, **overrides: Any) -> Door:
        return cast(Door, self._add("door", overrides))

    def add_fixture(self, **overrides: Any) -> Fixture:
        return cast(Fixture, self._add("fixture", overrides))

    def add_path(self, **overrides: Any) -> EgressPath:
        return cast(EgressPath, self._add("path", overrides))

    def add(self, element: ElementBase) -> ElementBase:
        """Append an already-built element to its collection.

        The element is re-validated first, so copies made with
        ``model_copy(update=...)`` cannot smuggle in NaN or wrong types.
        """
        element = _revalidated(element)
        collection = self._collection(element.type)
        if any(e.id == element.id for e in collection):
            raise ValueError(f"Duplicate {element.type} id: {element.id}")
        collection.append(element)
        self._recompute()
        return element

    def find(self, element_id: str) -> ElementBase | None:
        """Look up an element by id: rooms first, then doors, fixtures, paths."""
        for element in self._floorplan.elements():
            if element.id == element_id:
                return element
        return None

    def update(self, element: ElementBase) -> ElementBase:
        """Replace the element with the same id and return the stored copy.

        Raises ``KeyError`` if no such element exists and
        ``pydantic.ValidationError`` if the element is malformed.
        """
        element = _revalidated(element)
        collection = self._collection(element.type)
        for index, existing in enumerate(collection):
            if existing.id == element.id:
                collection[index] = element
                self._recompute()
                return element
        raise KeyError(f"{element.type} not found: {element.id}")

    def remove(self, element_id: str, kind: str | None = None) -> None:
        """Delete an element by id, optionally restricted to one kind.

        Raises ``KeyError`` if nothing matched.
        """
        kinds = [kind] if kind else list(_COLLECTION_FOR_KIND)
        for k in kinds:
            collection = self._collection(k)
            for index, existing in enumerate(collection):
                if existing.id == element_id:
                    del collection[index]
                    self._recompute()
                    return
        raise KeyError(f"Element not found: {element_id}")

    def set_room_area(self, room_id: str, area: float) -> Room:
        """Set a room's area and resize it to the matching square footprint."""
        _require_measurement("Room area", area)
        room = self._get(room_id, "room")
        side_mm = math.sqrt(area) * 1000
        updated = _revalidated(room, area=area, width=side_mm, height=side_mm)
        return cast(Room, self.update(updated))

    def set_path_width(self, path_id: str, path_width: float) -> EgressPath:
        """Set an egress path's width, keeping its drawn thickness in step."""
        _require_measurement("Path width", path_width)
        path = self._get(path_id, "path")
        updated = _revalidated(path, path_width=path_width, height=path_width)
        return cast(EgressPath, self.update(updated))

    # -- Internals ---------------------------------------------------------

    def _add(self, kind: str, overrides: dict[str, Any]) -> ElementBase:
        return self.add(new_element(kind, **overrides))

    def _get(self, element_id: str, kind: str) -> ElementBase:
        for element in self._collection(kind):
            if element.id == element_id:
                return element
        raise KeyError(f"{kind} not found: {element_id}")

    def _collection(self, kind: str) -> list[Any]:
        try:
            return getattr(self._floorplan, _COLLECTION_FOR_KIND[kind])
        except KeyError:
            raise KeyError(f"Unknown element kind: {kind}") from None

    def _recompute(self) -> None:
        self.violations = self.engine.evaluate(self._floorplan)


def _revalidated(element: ElementBase, **changes: Any) -> ElementBase:
    """Rebuild *element* through its model's validators, applying *changes*."""
    return type(element).model_validate({**element.model_dump(), **changes})


def _require_measurement(label: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{label} must be a finite non-negative number, got {value}")
