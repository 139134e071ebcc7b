"""ComplianceEngine: the reasoning loop over a whole floorplan.

Usage::

    from rtccc.compliance import ComplianceEngine

    engine = ComplianceEngine()
    violations = engine.evaluate(floorplan)
    report = engine.check(floorplan)

The loop is stateless: every call re-derives all zones and verdicts from
the snapshot it is given.  Output order is fixed (doors with their paths,
then rooms, then fixtures, each in input order) so repeated evaluation of
the same floorplan yields the same list.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rtccc.compliance.codes import RuleThresholds
from rtccc.compliance.report import INVALID_INPUT, ComplianceReport, Violation
from rtccc.compliance.rules import (
    CEILING_HEIGHT,
    DOOR_WIDTH,
    EGRESS_OBSTRUCTION,
    FIXTURE_CLEARANCE,
    ROOM_AREA,
    check_ceiling_height,
    check_door_width,
    check_egress_obstruction,
    check_fixture_clearance,
    check_room_area,
)
from rtccc.config import ConfigManager
from rtccc.models.floorplan import Floorplan, FloorplanValidationError, partition_records

logger = logging.getLogger(__name__)


def evaluate(
    floorplan: Floorplan,
    thresholds: RuleThresholds | None = None,
) -> list[Violation]:
    """Run every applicable rule and return the failing verdicts in order."""
    limits = thresholds or RuleThresholds()
    violations: list[Violation] = []

    # KR 1 & KR 5: doors, each against every egress path
    for door in floorplan.doors:
        result = check_door_width(door, limits.min_door_width_mm)
        if not result.compliant:
            violations.append(Violation(id=door.id, message=result.message, rule=DOOR_WIDTH))

        for path in floorplan.paths:
            result = check_egress_obstruction(door, path)
            if not result.compliant:
                violations.append(
                    Violation(id=door.id, message=result.message, rule=EGRESS_OBSTRUCTION)
                )

    # KR 2 & KR 4: rooms
    for room in floorplan.rooms:
        result = check_room_area(room, limits.min_room_area_m2)
        if not result.compliant:
            violations.append(Violation(id=room.id, message=result.message, rule=ROOM_AREA))

        result = check_ceiling_height(room, limits.min_ceiling_height_mm)
        if not result.compliant:
            violations.append(Violation(id=room.id, message=result.message, rule=CEILING_HEIGHT))

    # KR 3: fixtures against paths, door swings and each other
    for fixture in floorplan.fixtures:
        result = check_fixture_clearance(
            fixture,
            doors=floorplan.doors,
            paths=floorplan.paths,
            fixtures=floorplan.fixtures,
        )
        if not result.compliant:
            violations.append(
                Violation(id=fixture.id, message=result.message, rule=FIXTURE_CLEARANCE)
            )

    logger.debug(
        "Evaluated %d rooms, %d doors, %d fixtures, %d paths: %d violation(s)",
        len(floorplan.rooms),
        len(floorplan.doors),
        len(floorplan.fixtures),
        len(floorplan.paths),
        len(violations),
    )
    return violations


class ComplianceEngine:
    """Evaluate floorplans against the building-code rules.

    Parameters
    ----------
    thresholds:
        Rule minimums.  Defaults to the code values (915 mm exit doors,
        9 m² rooms, 2400 mm ceilings).
    """

    def __init__(self, thresholds: RuleThresholds | None = None) -> None:
        self.thresholds = thresholds or RuleThresholds()

    @classmethod
    def for_project(cls, project_path: str | Path | None = None) -> ComplianceEngine:
        """Engine using the thresholds configured for *project_path*.

        See :class:`~rtccc.config.ConfigManager` for the sources consulted.
        """
        return cls(ConfigManager().load_config(project_path))

    def evaluate(self, floorplan: Floorplan) -> list[Violation]:
        """Return the violation list for *floorplan*."""
        return evaluate(floorplan, self.thresholds)

    def check(self, floorplan: Floorplan) -> ComplianceReport:
        """Evaluate *floorplan* and wrap the result in a report."""
        return ComplianceReport(violations=self.evaluate(floorplan))

    def check_data(self, data: Any, *, strict: bool = False) -> ComplianceReport:
        """Evaluate raw floorplan data as loaded from storage.

        Parameters
        ----------
        data:
            Dict with ``rooms``, ``doors``, ``fixtures`` and ``paths``
            lists of element records.
        strict:
            If *True*, any malformed record raises
            :class:`FloorplanValidationError` before evaluation.  If
            *False* (default), each malformed record is reported as an
            ``invalid-input`` violation and left out of rule evaluation.

        Returns
        -------
        ComplianceReport
        """
        floorplan, invalid = partition_records(data)

        if invalid and strict:
            raise FloorplanValidationError([r.describe() for r in invalid])

        violations = [
            Violation(
                id=record.element_id or record.label,
                message=f"Invalid {record.collection[:-1]} record {record.describe()}",
                rule=INVALID_INPUT,
            )
            for record in invalid
        ]
        if invalid:
            logger.debug("Skipped %d invalid record(s)", len(invalid))

        violations.extend(self.evaluate(floorplan))
        return ComplianceReport(violations=violations)
