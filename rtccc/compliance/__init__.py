"""Code Compliance Engine: evaluate floorplans against building-code rules."""

from rtccc.compliance.codes import BuildingCode, BuildingCodeError, RuleThresholds
from rtccc.compliance.engine import ComplianceEngine, evaluate
from rtccc.compliance.report import ComplianceReport, Violation
from rtccc.compliance.rules import RULES, Rule, RuleResult

__all__ = [
    "RULES",
    "BuildingCode",
    "BuildingCodeError",
    "ComplianceEngine",
    "ComplianceReport",
    "Rule",
    "RuleResult",
    "RuleThresholds",
    "Violation",
    "evaluate",
]
