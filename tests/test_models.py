"""Tests for the plan element models and floorplan loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from rtccc.models import (
    Door,
    EgressPath,
    Fixture,
    Floorplan,
    FloorplanValidationError,
    Room,
    RoomType,
    SwingDirection,
    load_floorplan,
    parse_element,
    partition_records,
    save_floorplan,
)


def _door_record(**overrides) -> dict:
    data = {
        "id": "door-1",
        "type": "door",
        "x": 150,
        "y": 150,
        "width": 915,
        "height": 10,
        "isRequiredExit": True,
        "swingDirection": "LH",
    }
    data.update(overrides)
    return data


def _room_record(**overrides) -> dict:
    data = {
        "id": "room-1",
        "type": "room",
        "roomType": "Office",
        "x": 0,
        "y": 0,
        "width": 3000,
        "height": 3000,
        "area": 9,
        "ceilingHeight": 2500,
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Element models
# ---------------------------------------------------------------------------


class TestElements:
    def test_camel_case_aliases(self) -> None:
        room = Room.model_validate(_room_record())
        assert room.room_type == "Office"
        assert room.ceiling_height == 2500

    def test_snake_case_names_accepted(self) -> None:
        door = Door(id="d", x=0, y=0, width=900, height=10, is_required_exit=False)
        assert door.is_required_exit is False
        assert door.swing_direction is SwingDirection.LH

    def test_type_defaults_per_model(self) -> None:
        path = EgressPath(id="p", x=0, y=0, width=3000, height=1200, path_width=1200)
        assert path.type == "path"

    def test_rotation_missing_is_zero(self) -> None:
        assert Door.model_validate(_door_record()).rotation == 0

    def test_rotation_null_is_zero(self) -> None:
        assert Door.model_validate(_door_record(rotation=None)).rotation == 0

    def test_rotation_float_accepted(self) -> None:
        assert Door.model_validate(_door_record(rotation=90.0)).rotation == 90

    def test_rotation_full_turn_wraps(self) -> None:
        assert Door.model_validate(_door_record(rotation=450)).rotation == 90

    def test_rotation_off_grid_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Door.model_validate(_door_record(rotation=45))

    def test_missing_numeric_field_rejected(self) -> None:
        record = _door_record()
        del record["width"]
        with pytest.raises(ValidationError):
            Door.model_validate(record)

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Door.model_validate(_door_record(width=float("nan")))

    def test_unlisted_room_type_accepted(self) -> None:
        room = Room.model_validate(_room_record(roomType="Storage"))
        assert room.room_type == "Storage"

    def test_room_type_enum_member_stored_as_label(self) -> None:
        room = Room.model_validate(_room_record(roomType=RoomType.CORRIDOR))
        assert room.room_type == "Corridor"
        assert room.model_dump(by_alias=True)["roomType"] == "Corridor"

    def test_empty_room_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Room.model_validate(_room_record(roomType=""))

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Door.model_validate(_door_record(id=""))

    def test_parse_element_routes_by_type(self) -> None:
        assert isinstance(parse_element(_door_record()), Door)
        assert isinstance(parse_element(_room_record()), Room)
        fixture = parse_element(
            {
                "type": "fixture",
                "id": "f",
                "name": "Sink",
                "x": 0,
                "y": 0,
                "width": 10,
                "height": 10,
                "isAccessible": True,
                "clearanceWidth": 800,
                "clearanceDepth": 1200,
            }
        )
        assert isinstance(fixture, Fixture)

    def test_parse_element_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            parse_element({**_door_record(), "type": "window"})

    def test_dump_uses_editor_names(self) -> None:
        data = Door.model_validate(_door_record()).model_dump(mode="json", by_alias=True)
        assert data["isRequiredExit"] is True
        assert data["swingDirection"] == "LH"
        assert data["type"] == "door"


# ---------------------------------------------------------------------------
# Floorplan loading
# ---------------------------------------------------------------------------


class TestFloorplan:
    def test_empty(self) -> None:
        plan = Floorplan.from_data({"rooms": [], "doors": [], "fixtures": [], "paths": []})
        assert plan.is_empty()

    def test_missing_collections_default_empty(self) -> None:
        plan = Floorplan.from_data({"doors": [_door_record()]})
        assert plan.rooms == []
        assert len(plan.doors) == 1

    def test_null_collection_defaults_empty(self) -> None:
        assert Floorplan.from_data({"paths": None}).paths == []

    def test_elements_order(self) -> None:
        plan = Floorplan.from_data({"doors": [_door_record()], "rooms": [_room_record()]})
        assert [e.id for e in plan.elements()] == ["room-1", "door-1"]

    def test_invalid_record_fails_fast_with_location(self) -> None:
        bad = _door_record(id="door-7")
        del bad["width"]
        with pytest.raises(FloorplanValidationError) as exc_info:
            Floorplan.from_data({"doors": [_door_record(), bad]})
        message = str(exc_info.value)
        assert "doors[1]" in message
        assert "door-7" in message
        assert "width" in message

    def test_all_bad_records_listed(self) -> None:
        bad_door = _door_record()
        del bad_door["isRequiredExit"]
        bad_room = _room_record(area="big")
        with pytest.raises(FloorplanValidationError) as exc_info:
            Floorplan.from_data({"doors": [bad_door], "rooms": [bad_room]})
        assert len(exc_info.value.problems) == 2

    def test_record_in_wrong_collection(self) -> None:
        with pytest.raises(FloorplanValidationError):
            Floorplan.from_data({"doors": [_room_record()]})

    def test_non_object_document(self) -> None:
        with pytest.raises(FloorplanValidationError, match="JSON object"):
            Floorplan.from_data([1, 2, 3])

    def test_collection_not_a_list(self) -> None:
        with pytest.raises(FloorplanValidationError, match="doors must be a list"):
            Floorplan.from_data({"doors": {"id": "d"}})

    def test_bad_json(self) -> None:
        with pytest.raises(FloorplanValidationError, match="not valid JSON"):
            Floorplan.from_json("{rooms: ")

    def test_error_is_value_error(self) -> None:
        assert issubclass(FloorplanValidationError, ValueError)

    def test_partition_keeps_valid_records(self) -> None:
        bad = _door_record(id="door-2")
        del bad["x"]
        plan, invalid = partition_records({"doors": [_door_record(), bad]})
        assert [d.id for d in plan.doors] == ["door-1"]
        assert len(invalid) == 1
        assert invalid[0].collection == "doors"
        assert invalid[0].index == 1
        assert invalid[0].element_id == "door-2"
        assert any(e.startswith("x:") for e in invalid[0].errors)

    def test_json_round_trip_preserves_editor_format(self) -> None:
        plan = Floorplan.from_data({"rooms": [_room_record()], "doors": [_door_record()]})
        data = json.loads(plan.to_json())
        assert data["rooms"][0]["roomType"] == "Office"
        assert Floorplan.from_json(plan.to_json()) == plan


class TestFloorplanFiles:
    def test_save_and_load(self, tmp_path: Path) -> None:
        plan = Floorplan.from_data({"doors": [_door_record()]})
        path = save_floorplan(plan, tmp_path / "projects" / "design.json")
        assert path.is_file()
        assert load_floorplan(path) == plan

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_floorplan(tmp_path / "nope.json")

    def test_load_partial_project_fails(self, tmp_path: Path) -> None:
        record = _room_record()
        del record["ceilingHeight"]
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"rooms": [record]}), encoding="utf-8")
        with pytest.raises(FloorplanValidationError, match="ceilingHeight"):
            load_floorplan(path)
