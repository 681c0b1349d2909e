"""Typed request and response shapes for the Sheets API."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from groggy_sheets.sheets.exceptions import ValidationError


class ValueInputOption(str, Enum):
    """How written values are interpreted."""

    RAW = "RAW"
    USER_ENTERED = "USER_ENTERED"


class InsertDataOption(str, Enum):
    """Whether appended rows overwrite or push existing rows down."""

    OVERWRITE = "OVERWRITE"
    INSERT_ROWS = "INSERT_ROWS"


class ValueRenderOption(str, Enum):
    """How read values are rendered."""

    FORMATTED_VALUE = "FORMATTED_VALUE"
    UNFORMATTED_VALUE = "UNFORMATTED_VALUE"
    FORMULA = "FORMULA"


class PasteType(str, Enum):
    PASTE_NORMAL = "PASTE_NORMAL"
    PASTE_VALUES = "PASTE_VALUES"
    PASTE_FORMAT = "PASTE_FORMAT"
    PASTE_NO_BORDERS = "PASTE_NO_BORDERS"
    PASTE_FORMULA = "PASTE_FORMULA"
    PASTE_DATA_VALIDATION = "PASTE_DATA_VALIDATION"
    PASTE_CONDITIONAL_FORMATTING = "PASTE_CONDITIONAL_FORMATTING"


# =========================================================================
# Cells and grids
# =========================================================================


class CellKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    """A single cell value tagged with its kind."""

    kind: CellKind
    value: str | int | float | bool | None = None

    def __post_init__(self):
        kind = CellKind(self.kind)
        object.__setattr__(self, "kind", kind)
        value = self.value

        if kind is CellKind.EMPTY:
            valid = value is None
        elif kind is CellKind.BOOLEAN:
            valid = isinstance(value, bool)
        elif kind is CellKind.NUMBER:
            valid = (
                isinstance(value, (int, float))
                and not isinstance(value, bool)
                and math.isfinite(value)
            )
        else:
            # "" is the empty cell, never a string cell
            valid = isinstance(value, str) and value != ""
        if not valid:
            raise ValidationError(f"Value {value!r} is not a valid {kind.value} cell")

    @classmethod
    def of(cls, raw: Any) -> Cell:
        """Classify a JSON scalar.

        Raises:
            ValidationError: If ``raw`` is not a string, number, boolean or empty.
        """
        if isinstance(raw, Cell):
            return raw
        if raw is None or raw == "":
            return EMPTY_CELL
        # bool is a subclass of int
        if isinstance(raw, bool):
            return cls(CellKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            if not math.isfinite(raw):
                raise ValidationError(f"Non-finite number {raw!r} is not a JSON value")
            return cls(CellKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(CellKind.STRING, raw)
        raise ValidationError(f"Unsupported cell value {raw!r} ({type(raw).__name__})")

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def to_json(self) -> str | int | float | bool:
        """Wire value. Empty cells are written as ``""``."""
        if self.kind is CellKind.EMPTY:
            return ""
        return self.value

    def __str__(self) -> str:
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.BOOLEAN:
            return "TRUE" if self.value else "FALSE"
        return str(self.value)


EMPTY_CELL = Cell(CellKind.EMPTY)


@dataclass(frozen=True)
class ValueGrid:
    """Rows of cells. Rows may have different lengths."""

    rows: tuple[tuple[Cell, ...], ...] = ()

    @classmethod
    def of(cls, values: GridLike | None) -> ValueGrid:
        """Build a grid from nested lists of scalars (or return an existing grid)."""
        if isinstance(values, ValueGrid):
            return values
        if values is None:
            return cls()
        if isinstance(values, (str, bytes)):
            raise ValidationError("Grid must be a sequence of rows, not a string")

        rows = []
        for row in values:
            if isinstance(row, (str, bytes)) or not isinstance(row, Iterable):
                raise ValidationError(f"Grid row must be a sequence of cells, got {row!r}")
            rows.append(tuple(Cell.of(value) for value in row))
        return cls(tuple(rows))

    def to_values(self) -> list[list[str | int | float | bool]]:
        """Nested list form sent to the API."""
        return [[cell.to_json() for cell in row] for row in self.rows]

    def cell(self, row: int, column: int) -> Cell:
        """Cell at a position; positions past the end of a row are empty."""
        if row >= len(self.rows) or column >= len(self.rows[row]):
            return EMPTY_CELL
        return self.rows[row][column]

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> tuple[Cell, ...]:
        return self.rows[index]


GridLike = Union[ValueGrid, Iterable[Iterable[Any]]]


# =========================================================================
# Spreadsheets
# =========================================================================


@dataclass(frozen=True)
class SpreadsheetReference:
    """Identifies a remote spreadsheet."""

    id: str
    title: str = ""
    url: str | None = None


@dataclass
class Sheet:
    """Represents a sheet within a spreadsheet."""

    id: int
    title: str
    index: int
    row_count: int = 1000
    column_count: int = 26


@dataclass
class Spreadsheet:
    """Spreadsheet metadata."""

    id: str
    title: str
    sheets: list[Sheet] = field(default_factory=list)
    url: str | None = None

    @property
    def reference(self) -> SpreadsheetReference:
        return SpreadsheetReference(id=self.id, title=self.title, url=self.url)

    @property
    def default_sheet(self) -> Sheet | None:
        """Get the first sheet."""
        if self.sheets:
            return self.sheets[0]
        return None

    @classmethod
    def from_response(cls, data: dict) -> Spreadsheet:
        sheets = []
        for sheet_data in data.get("sheets", []):
            props = sheet_data.get("properties", {})
            grid_props = props.get("gridProperties", {})
            sheets.append(
                Sheet(
                    id=props.get("sheetId", 0),
                    title=props.get("title", ""),
                    index=props.get("index", 0),
                    row_count=grid_props.get("rowCount", 1000),
                    column_count=grid_props.get("columnCount", 26),
                )
            )

        return cls(
            id=data["spreadsheetId"],
            title=data.get("properties", {}).get("title", ""),
            sheets=sheets,
            url=data.get("spreadsheetUrl"),
        )


# =========================================================================
# Write summaries
# =========================================================================


@dataclass
class UpdateSummary:
    """Result of writing one range."""

    spreadsheet_id: str
    updated_range: str = ""
    updated_rows: int = 0
    updated_columns: int = 0
    updated_cells: int = 0
    updated_data: ValueGrid | None = None

    @classmethod
    def from_response(cls, data: dict, spreadsheet_id: str = "") -> UpdateSummary:
        updated_data = data.get("updatedData")
        return cls(
            spreadsheet_id=data.get("spreadsheetId", spreadsheet_id),
            updated_range=data.get("updatedRange", ""),
            updated_rows=data.get("updatedRows", 0),
            updated_columns=data.get("updatedColumns", 0),
            updated_cells=data.get("updatedCells", 0),
            updated_data=(
                ValueGrid.of(updated_data.get("values")) if updated_data is not None else None
            ),
        )


@dataclass
class BatchUpdateSummary:
    """Result of writing several ranges in one request."""

    spreadsheet_id: str
    total_updated_rows: int = 0
    total_updated_columns: int = 0
    total_updated_cells: int = 0
    total_updated_sheets: int = 0
    responses: list[UpdateSummary] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: dict, spreadsheet_id: str = "") -> BatchUpdateSummary:
        spreadsheet_id = data.get("spreadsheetId", spreadsheet_id)
        return cls(
            spreadsheet_id=spreadsheet_id,
            total_updated_rows=data.get("totalUpdatedRows", 0),
            total_updated_columns=data.get("totalUpdatedColumns", 0),
            total_updated_cells=data.get("totalUpdatedCells", 0),
            total_updated_sheets=data.get("totalUpdatedSheets", 0),
            responses=[
                UpdateSummary.from_response(item, spreadsheet_id)
                for item in data.get("responses", [])
            ],
        )


@dataclass
class AppendSummary:
    """Result of appending rows after a table."""

    spreadsheet_id: str
    table_range: str | None = None
    updates: UpdateSummary | None = None

    @property
    def updated_data(self) -> ValueGrid | None:
        """Post-write values, when requested with ``include_values``."""
        return self.updates.updated_data if self.updates else None

    @classmethod
    def from_response(cls, data: dict, spreadsheet_id: str = "") -> AppendSummary:
        spreadsheet_id = data.get("spreadsheetId", spreadsheet_id)
        updates = data.get("updates")
        return cls(
            spreadsheet_id=spreadsheet_id,
            table_range=data.get("tableRange"),
            updates=UpdateSummary.from_response(updates, spreadsheet_id) if updates else None,
        )


# =========================================================================
# Structural edits
# =========================================================================


@dataclass(frozen=True)
class GridRange:
    """Zero-based, half-open rectangle on one sheet.

    Unset bounds extend to the edge of the sheet.
    """

    sheet_id: int
    start_row_index: int | None = None
    end_row_index: int | None = None
    start_column_index: int | None = None
    end_column_index: int | None = None

    def to_dict(self) -> dict[str, int]:
        body = {"sheetId": self.sheet_id}
        for key, value in (
            ("startRowIndex", self.start_row_index),
            ("endRowIndex", self.end_row_index),
            ("startColumnIndex", self.start_column_index),
            ("endColumnIndex", self.end_column_index),
        ):
            if value is not None:
                body[key] = value
        return body


@dataclass(frozen=True)
class AddSheet:
    """Add a sheet with the given title (and optional fixed id / position)."""

    title: str
    sheet_id: int | None = None
    index: int | None = None

    def to_request(self) -> dict[str, Any]:
        properties: dict[str, Any] = {"title": self.title}
        if self.sheet_id is not None:
            properties["sheetId"] = self.sheet_id
        if self.index is not None:
            properties["index"] = self.index
        return {"addSheet": {"properties": properties}}


@dataclass(frozen=True)
class CopyPaste:
    """Copy a rectangle of cells onto another rectangle."""

    source: GridRange
    destination: GridRange
    paste_type: PasteType = PasteType.PASTE_NORMAL

    def to_request(self) -> dict[str, Any]:
        return {
            "copyPaste": {
                "source": self.source.to_dict(),
                "destination": self.destination.to_dict(),
                "pasteType": PasteType(self.paste_type).value,
            }
        }


@dataclass(frozen=True)
class RenameSpreadsheet:
    """Change the spreadsheet title."""

    title: str

    def to_request(self) -> dict[str, Any]:
        return {
            "updateSpreadsheetProperties": {
                "properties": {"title": self.title},
                "fields": "title",
            }
        }


StructuralEdit = Union[AddSheet, CopyPaste, RenameSpreadsheet]
