"""Tests for per-project threshold configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rtccc.compliance import BuildingCodeError, ComplianceEngine, RuleThresholds
from rtccc.config import THRESHOLD_ENV_VARS, ConfigManager
from rtccc.models import Door, Floorplan


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in THRESHOLD_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def _write_settings(root: Path, settings: object) -> None:
    (root / ".rtccc").mkdir(exist_ok=True)
    (root / ".rtccc" / "config.json").write_text(json.dumps(settings), encoding="utf-8")


# ---------------------------------------------------------------------------
# Layering
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_defaults(self) -> None:
        assert ConfigManager().load_config() == RuleThresholds()

    def test_missing_project_files_use_defaults(self, tmp_path: Path) -> None:
        assert ConfigManager().load_config(tmp_path) == RuleThresholds()

    def test_building_codes(self, tmp_path: Path) -> None:
        _write_settings(
            tmp_path,
            {
                "buildingCodes": [
                    {"ruleName": "Exit width", "featureKey": "door_width",
                     "thresholdValue": 1000, "logicOperator": "gte"},
                    {"ruleName": "Clear path", "featureKey": "egress_obstruction"},
                ]
            },
        )
        thresholds = ConfigManager().load_config(tmp_path)
        assert thresholds.min_door_width_mm == 1000
        assert thresholds.min_room_area_m2 == 9

    def test_explicit_thresholds_override_codes(self, tmp_path: Path) -> None:
        _write_settings(
            tmp_path,
            {
                "buildingCodes": [
                    {"ruleName": "Area", "featureKey": "room_area", "thresholdValue": 12},
                ],
                "thresholds": {"min_room_area_m2": 10},
            },
        )
        assert ConfigManager().load_config(tmp_path).min_room_area_m2 == 10

    def test_env_file_overrides_config_json(self, tmp_path: Path) -> None:
        _write_settings(tmp_path, {"thresholds": {"min_door_width_mm": 950}})
        (tmp_path / ".env").write_text(
            "# local\nOTHER_APP_KEY=x\nRTCCC_MIN_DOOR_WIDTH_MM=1000\n", encoding="utf-8"
        )
        assert ConfigManager().load_config(tmp_path).min_door_width_mm == 1000

    def test_environment_overrides_all(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text("RTCCC_MIN_DOOR_WIDTH_MM=1000\n", encoding="utf-8")
        monkeypatch.setenv("RTCCC_MIN_DOOR_WIDTH_MM", "1200")
        assert ConfigManager().load_config(tmp_path).min_door_width_mm == 1200

    def test_environment_without_project(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RTCCC_MIN_CEILING_HEIGHT_MM", "2700")
        assert ConfigManager().load_config().min_ceiling_height_mm == 2700


# ---------------------------------------------------------------------------
# Malformed sources
# ---------------------------------------------------------------------------


class TestConfigErrors:
    def test_broken_config_json(self, tmp_path: Path) -> None:
        (tmp_path / ".rtccc").mkdir()
        (tmp_path / ".rtccc" / "config.json").write_text("{oops", encoding="utf-8")
        with pytest.raises(ValueError, match="not valid JSON"):
            ConfigManager().load_config(tmp_path)

    def test_config_json_not_an_object(self, tmp_path: Path) -> None:
        _write_settings(tmp_path, [1, 2])
        with pytest.raises(ValueError, match="JSON object"):
            ConfigManager().load_config(tmp_path)

    def test_unknown_threshold(self, tmp_path: Path) -> None:
        _write_settings(tmp_path, {"thresholds": {"min_window_width_mm": 600}})
        with pytest.raises(ValueError, match="min_window_width_mm"):
            ConfigManager().load_config(tmp_path)

    def test_bad_building_code(self, tmp_path: Path) -> None:
        _write_settings(
            tmp_path,
            {"buildingCodes": [{"ruleName": "Area", "featureKey": "room_area",
                                "thresholdValue": 9, "logicOperator": "lte"}]},
        )
        with pytest.raises(BuildingCodeError):
            ConfigManager().load_config(tmp_path)

    def test_non_numeric_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RTCCC_MIN_ROOM_AREA_M2", "large")
        with pytest.raises(ValueError, match="RTCCC_MIN_ROOM_AREA_M2"):
            ConfigManager().load_config()

    @pytest.mark.parametrize("raw", ["0", "-5", "nan", "inf"])
    def test_non_positive_or_non_finite(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("RTCCC_MIN_DOOR_WIDTH_MM", raw)
        with pytest.raises(ValueError, match="positive"):
            ConfigManager().load_config()


# ---------------------------------------------------------------------------
# Template and engine wiring
# ---------------------------------------------------------------------------


class TestConfigUse:
    def test_generate_env_template(self, tmp_path: Path) -> None:
        path = ConfigManager().generate_env_template(tmp_path)
        text = path.read_text(encoding="utf-8")
        assert path.name == ".env.example"
        assert "RTCCC_MIN_DOOR_WIDTH_MM=915\n" in text
        assert "RTCCC_MIN_ROOM_AREA_M2=9\n" in text
        assert "RTCCC_MIN_CEILING_HEIGHT_MM=2400\n" in text

    def test_template_round_trips_to_defaults(self, tmp_path: Path) -> None:
        manager = ConfigManager()
        template = manager.generate_env_template(tmp_path)
        template.rename(tmp_path / ".env")
        assert manager.load_config(tmp_path) == RuleThresholds()

    def test_engine_for_project(self, tmp_path: Path) -> None:
        _write_settings(tmp_path, {"thresholds": {"min_door_width_mm": 1000}})
        engine = ComplianceEngine.for_project(tmp_path)
        plan = Floorplan(
            doors=[Door(id="d1", x=0, y=0, width=950, height=100, is_required_exit=True)]
        )
        assert [v.rule for v in engine.evaluate(plan)] == ["door_width"]
        assert ComplianceEngine().evaluate(plan) == []
