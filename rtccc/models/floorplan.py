"""Floorplan: the environment snapshot the compliance engine evaluates.

A floorplan is four ordered collections (rooms, doors, fixtures, paths),
persisted by the editor as a single JSON document::

    {"rooms": [...], "doors": [...], "fixtures": [...], "paths": [...]}

Loading is the only place malformed records can enter, so every loader
here validates up front and raises :class:`FloorplanValidationError`
with a per-record description instead of letting partial data reach the
rules.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from rtccc.models.element import (
    Door,
    EgressPath,
    ElementBase,
    Fixture,
    Room,
)

logger = logging.getLogger(__name__)

# Collection name -> element model, in evaluation order of the editor's JSON
COLLECTIONS: dict[str, type[ElementBase]] = {
    "rooms": Room,
    "doors": Door,
    "fixtures": Fixture,
    "paths": EgressPath,
}


class FloorplanValidationError(ValueError):
    """Raised when floorplan data cannot be turned into valid elements."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        summary = "; ".join(problems)
        super().__init__(f"Invalid floorplan data ({len(problems)} problem(s)): {summary}")


class InvalidRecord(BaseModel):
    """A single element record rejected during lenient loading."""

    collection: str
    index: int
    element_id: str = ""
    errors: list[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        """Human-readable location, e.g. ``doors[2] (id='door-7')``."""
        where = f"{self.collection}[{self.index}]"
        if self.element_id:
            where += f" (id={self.element_id!r})"
        return where

    def describe(self) -> str:
        return f"{self.label}: {', '.join(self.errors)}"


class Floorplan(BaseModel):
    """The four element collections that make up one design."""

    rooms: list[Room] = Field(default_factory=list)
    doors: list[Door] = Field(default_factory=list)
    fixtures: list[Fixture] = Field(default_factory=list)
    paths: list[EgressPath] = Field(default_factory=list)

    def elements(self) -> Iterator[ElementBase]:
        """Yield every element: rooms, then doors, fixtures and paths."""
        yield from self.rooms
        yield from self.doors
        yield from self.fixtures
        yield from self.paths

    def is_empty(self) -> bool:
        return not (self.rooms or self.doors or self.fixtures or self.paths)

    # -- Serialisation -----------------------------------------------------

    def to_data(self) -> dict[str, Any]:
        """Return the editor's camelCase JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_data(), indent=indent)

    @classmethod
    def from_data(cls, data: Any) -> Floorplan:
        """Validate a floorplan dict, failing fast on the first bad load.

        Every malformed record is listed in the raised error, not just
        the first one.
        """
        floorplan, invalid = partition_records(data)
        if invalid:
            raise FloorplanValidationError([r.describe() for r in invalid])
        return floorplan

    @classmethod
    def from_json(cls, text: str) -> Floorplan:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FloorplanValidationError([f"not valid JSON: {exc}"]) from exc
        return cls.from_data(data)


def partition_records(data: Any) -> tuple[Floorplan, list[InvalidRecord]]:
    """Split raw floorplan data into valid elements and rejected records.

    Missing collections default to empty, as the editor's loader does.
    Structural problems (a non-dict document, a collection that is not a
    list) cannot be attributed to one record and raise
    :class:`FloorplanValidationError` immediately.
    """
    if not isinstance(data, dict):
        raise FloorplanValidationError(
            [f"floorplan must be a JSON object, got {type(data).__name__}"]
        )

    valid: dict[str, list[ElementBase]] = {}
    invalid: list[InvalidRecord] = []

    for collection, model in COLLECTIONS.items():
        records = data.get(collection)
        if records is None:
            records = []
        if not isinstance(records, list):
            raise FloorplanValidationError(
                [f"{collection} must be a list, got {type(records).__name__}"]
            )

        valid[collection] = []
        for index, record in enumerate(records):
            if isinstance(record, model):
                valid[collection].append(record)
                continue
            try:
                valid[collection].append(model.model_validate(record))
            except ValidationError as exc:
                bad = InvalidRecord(
                    collection=collection,
                    index=index,
                    element_id=_record_id(record),
                    errors=_format_errors(exc),
                )
                logger.debug("Rejected %s", bad.describe())
                invalid.append(bad)

    return Floorplan(**valid), invalid


def load_floorplan(path: str | Path) -> Floorplan:
    """Read and validate a floorplan JSON file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Floorplan file not found: {file_path}")
    floorplan = Floorplan.from_json(file_path.read_text(encoding="utf-8"))
    logger.debug("Loaded floorplan from %s", file_path)
    return floorplan


def save_floorplan(floorplan: Floorplan, path: str | Path) -> Path:
    """Write a floorplan as the editor's JSON document.  Returns the path."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(floorplan.to_json(), encoding="utf-8")
    return file_path


def _record_id(record: Any) -> str:
    if isinstance(record, dict):
        value = record.get("id")
        if isinstance(value, str):
            return value
    return ""


def _format_errors(exc: ValidationError) -> list[str]:
    """Flatten pydantic error details into ``field: message`` strings."""
    out: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "record"
        out.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return out
