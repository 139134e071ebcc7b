"""Global configuration: rule thresholds, constants, per-project overrides."""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rtccc.compliance.codes import RuleThresholds

logger = logging.getLogger(__name__)

# Minimum clear opening width of a required exit door (mm)
DEFAULT_MIN_EXIT_DOOR_WIDTH_MM = 915.0

# Minimum floor area of an occupiable room (m²)
DEFAULT_MIN_ROOM_AREA_M2 = 9.0

# Minimum ceiling height of an occupiable room (mm)
DEFAULT_MIN_CEILING_HEIGHT_MM = 2400.0

# Room types subject to the area and ceiling-height rules
OCCUPIABLE_ROOM_TYPES = frozenset({"Office", "Habitable", "Bedroom", "Living"})

# Quarter-turn rotations the editor can produce (degrees)
VALID_ROTATIONS = (0, 90, 180, 270)

# Per-project configuration lives under <project>/.rtccc/config.json
CONFIG_DIR = ".rtccc"
CONFIG_FILE = "config.json"

# Environment variable -> (RuleThresholds field, default, description)
THRESHOLD_ENV_VARS: dict[str, tuple[str, float, str]] = {
    "RTCCC_MIN_DOOR_WIDTH_MM": (
        "min_door_width_mm",
        DEFAULT_MIN_EXIT_DOOR_WIDTH_MM,
        "KR 1: minimum clear width of a required exit door (mm)",
    ),
    "RTCCC_MIN_ROOM_AREA_M2": (
        "min_room_area_m2",
        DEFAULT_MIN_ROOM_AREA_M2,
        "KR 2: minimum floor area of an occupiable room (m2)",
    ),
    "RTCCC_MIN_CEILING_HEIGHT_MM": (
        "min_ceiling_height_mm",
        DEFAULT_MIN_CEILING_HEIGHT_MM,
        "KR 4: minimum ceiling height of an occupiable room (mm)",
    ),
}

_THRESHOLD_FIELDS = frozenset(field for field, _, _ in THRESHOLD_ENV_VARS.values())


class ConfigManager:
    """Resolve the rule thresholds that apply to a project.

    Sources, lowest priority first:

    1. Code defaults (915 mm exit doors, 9 m² rooms, 2400 mm ceilings).
    2. ``buildingCodes`` records in ``<project>/.rtccc/config.json``,
       folded in with :func:`~rtccc.compliance.codes.thresholds_from_codes`.
    3. The ``thresholds`` object in the same file, keyed by field name.
    4. ``RTCCC_MIN_*`` lines in ``<project>/.env``.
    5. ``RTCCC_MIN_*`` process environment variables.

    A malformed source raises ``ValueError`` naming the file or variable;
    thresholds are never silently dropped.
    """

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Write ``.env.example`` listing every threshold variable.

        Returns the path to the generated file.
        """
        env_path = Path(project_path) / ".env.example"

        lines = ["# Rule threshold overrides for this project", ""]
        for var, (_, default, description) in THRESHOLD_ENV_VARS.items():
            lines.append(f"# {description}")
            lines.append(f"{var}={default:g}")
            lines.append("")

        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_config(self, project_path: str | Path | None = None) -> RuleThresholds:
        """Merge every source into a single :class:`RuleThresholds`."""
        from rtccc.compliance.codes import RuleThresholds, thresholds_from_codes

        thresholds = RuleThresholds()
        overrides: dict[str, float] = {}

        if project_path is not None:
            root = Path(project_path)
            settings = self._read_project_settings(root / CONFIG_DIR / CONFIG_FILE)

            codes = settings.get("buildingCodes") or []
            if not isinstance(codes, list):
                raise ValueError(f"{CONFIG_FILE}: buildingCodes must be a list")
            if codes:
                thresholds = thresholds_from_codes(codes, base=thresholds)

            explicit = settings.get("thresholds") or {}
            if not isinstance(explicit, dict):
                raise ValueError(f"{CONFIG_FILE}: thresholds must be an object")
            for field, raw in explicit.items():
                if field not in _THRESHOLD_FIELDS:
                    raise ValueError(f"{CONFIG_FILE}: unknown threshold {field!r}")
                overrides[field] = _to_threshold(f"{CONFIG_FILE} {field}", raw)

            for var, raw in self._read_env_file(root / ".env").items():
                overrides[THRESHOLD_ENV_VARS[var][0]] = _to_threshold(f".env {var}", raw)

        for var, (field, _, _) in THRESHOLD_ENV_VARS.items():
            raw = os.environ.get(var)
            if raw:
                overrides[field] = _to_threshold(var, raw)

        merged = RuleThresholds(**{**thresholds.model_dump(), **overrides})

        logger.debug("Resolved thresholds: %s", merged)
        return merged

    @staticmethod
    def _read_project_settings(path: Path) -> dict[str, Any]:
        if not path.is_file():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        return data

    @staticmethod
    def _read_env_file(path: Path) -> dict[str, str]:
        """Threshold variables set in a ``.env`` file; other keys are ignored."""
        if not path.is_file():
            return {}
        values: dict[str, str] = {}
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key in THRESHOLD_ENV_VARS and value.strip():
                values[key] = value.strip()
        return values


def _to_threshold(source: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"{source} must be numeric, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{source} must be numeric, got {raw!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{source} must be a positive number, got {raw!r}")
    return value
