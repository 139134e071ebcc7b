"""RTCCC: real-time construction compliance checking for 2-D floorplans."""

__version__ = "1.0.0"

from rtccc.compliance.codes import BuildingCode, BuildingCodeError, RuleThresholds
from rtccc.compliance.engine import ComplianceEngine, evaluate
from rtccc.compliance.report import ComplianceReport, Violation
from rtccc.config import ConfigManager
from rtccc.editor.session import FloorplanSession
from rtccc.models.element import Door, EgressPath, Fixture, Room, RoomType, SwingDirection
from rtccc.models.floorplan import Floorplan, FloorplanValidationError, load_floorplan

__all__ = [
    "__version__",
    "BuildingCode",
    "BuildingCodeError",
    "ComplianceEngine",
    "ComplianceReport",
    "ConfigManager",
    "Door",
    "EgressPath",
    "Fixture",
    "Floorplan",
    "FloorplanSession",
    "FloorplanValidationError",
    "Room",
    "RoomType",
    "RuleThresholds",
    "SwingDirection",
    "Violation",
    "evaluate",
    "load_floorplan",
]
