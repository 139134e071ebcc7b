"""Violation records and the ComplianceReport built from them."""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

from rtccc.compliance.rules import RULES

INVALID_INPUT = "invalid-input"


class Violation(BaseModel):
    """A failed rule, attributed to the element that failed it."""

    id: str
    """Id of the offending element."""

    compliant: Literal[False] = False
    message: str
    rule: str = ""
    """Rule key that produced the violation, or 'invalid-input'."""

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ComplianceReport(BaseModel):
    """Outcome of one evaluation of a whole floorplan."""

    violations: list[Violation] = Field(default_factory=list)
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> str:
        """Project status: 'compliant' or 'non-compliant'."""
        return "non-compliant" if self.violations else "compliant"

    @property
    def is_compliant(self) -> bool:
        return not self.violations

    def counts_by_rule(self) -> dict[str, int]:
        return dict(Counter(v.rule for v in self.violations))

    def violations_for(self, element_id: str) -> list[Violation]:
        return [v for v in self.violations if v.id == element_id]

    def summary(self) -> str:
        if not self.violations:
            return "Environment Compliant"
        return f"{len(self.violations)} Issues Found"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "checked_at": self.checked_at.isoformat(),
            "violations": [v.to_dict() for v in self.violations],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_markdown(self) -> str:
        """Render the report as a Markdown document."""
        lines: list[str] = []

        lines.append("# Compliance Report")
        lines.append("")
        lines.append(f"**Status:** {self.status.upper()}")
        lines.append(f"**Checked:** {self.checked_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append(f"**Summary:** {self.summary()}")
        lines.append("")

        if self.violations:
            lines.append("## Violations")
            lines.append("")
            lines.append("| Element | Rule | Category | Detail |")
            lines.append("|---------|------|----------|--------|")
            for v in self.violations:
                rule = RULES.get(v.rule)
                label = f"KR {rule.number}" if rule else v.rule
                category = rule.category if rule else ""
                detail = v.message.replace("|", "\\|")
                lines.append(f"| {v.id} | {label} | {category} | {detail} |")
            lines.append("")
        else:
            lines.append("No violations found. Floorplan passes all rules.")
            lines.append("")

        return "\n".join(lines)
