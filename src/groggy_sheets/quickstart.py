"""Print names and majors from the public sample spreadsheet.

https://docs.google.com/spreadsheets/d/1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms/edit
"""

from __future__ import annotations

from typing import TextIO

from groggy_sheets.config import SAMPLE_RANGE, SAMPLE_SPREADSHEET_ID
from groggy_sheets.sheets import SheetsClient, ValueGrid, ValueRenderOption

NAME_COLUMN = 0
MAJOR_COLUMN = 4


def format_students(grid: ValueGrid) -> list[str]:
    """Render columns A and E of each row as output lines."""
    if not grid:
        return ["No data found."]

    lines = ["Name, Major"]
    for index in range(len(grid)):
        name = grid.cell(index, NAME_COLUMN)
        major = grid.cell(index, MAJOR_COLUMN)
        lines.append(f"{name}, {major}")
    return lines


def run(
    client: SheetsClient,
    spreadsheet_id: str = SAMPLE_SPREADSHEET_ID,
    range_notation: str = SAMPLE_RANGE,
    out: TextIO | None = None,
) -> ValueGrid:
    """Read the range and print it. Returns the grid that was read."""
    grid = client.get_values(
        spreadsheet_id, range_notation, render=ValueRenderOption.FORMATTED_VALUE
    )
    for line in format_students(grid):
        print(line, file=out)
    return grid
