"""End-to-end tests against the real Sheets API.

Skipped unless GROGGY_SHEETS_LIVE_SPREADSHEET_ID names a scratch spreadsheet
the configured credentials can edit. The tests rewrite its first sheet.
"""

import os

import pytest

from groggy_sheets.google import AuthError
from groggy_sheets.sheets import (
    AddSheet,
    CopyPaste,
    GridRange,
    InsertDataOption,
    PasteType,
    RenameSpreadsheet,
    SheetsClient,
    ValueGrid,
    ValueInputOption,
    ValueRenderOption,
)

LIVE_SPREADSHEET_ID = os.environ.get("GROGGY_SHEETS_LIVE_SPREADSHEET_ID")

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(
        not LIVE_SPREADSHEET_ID,
        reason="GROGGY_SHEETS_LIVE_SPREADSHEET_ID required",
    ),
]

EXPENSES = [
    ["Expenses February"],
    ["books", 30],
    ["pens", 10],
    ["Expenses March"],
    ["clothes", 20],
    ["shoes", 5],
]


@pytest.fixture(scope="module")
def client():
    try:
        return SheetsClient.from_config()
    except AuthError as e:
        pytest.skip(f"No usable credentials: {e}")


@pytest.fixture
def expenses(client):
    """Reset the first sheet to the expenses table plus two totals."""
    client.update_values(LIVE_SPREADSHEET_ID, "A1:E20", [[""] * 5 for _ in range(20)])
    client.update_values(LIVE_SPREADSHEET_ID, "A1", EXPENSES, ValueInputOption.RAW)
    client.batch_update_values(
        LIVE_SPREADSHEET_ID,
        [
            ("D1", [["February Total", "=B2+B3"]]),
            ("D4", [["March Total", "=B5+B6"]]),
        ],
        ValueInputOption.USER_ENTERED,
    )
    return LIVE_SPREADSHEET_ID


def test_update_then_read_round_trip(client, expenses):
    grid = ValueGrid.of([["books", 30], ["pens", 10]])
    client.update_values(expenses, "A2", grid, ValueInputOption.RAW)
    assert client.get_values(expenses, "A2:B3") == grid


def test_batch_read_preserves_order(client, expenses):
    february, march = client.batch_get_values(
        expenses, ["E1", "E4"], render=ValueRenderOption.FORMATTED_VALUE
    )
    assert february.to_values() == [["40"]]
    assert march.to_values() == [["25"]]

    march, february = client.batch_get_values(
        expenses, ["E4", "E1"], render=ValueRenderOption.FORMATTED_VALUE
    )
    assert march.to_values() == [["25"]]
    assert february.to_values() == [["40"]]


def test_empty_range_reads_empty_grid(client, expenses):
    assert client.get_values(expenses, "H100:J120") == ValueGrid()


def test_append_computes_formula_below_table(client, expenses):
    summary = client.append_values(
        expenses,
        "A1",
        [["Total", "=E1+E4"]],
        input_mode=ValueInputOption.USER_ENTERED,
        insert_mode=InsertDataOption.INSERT_ROWS,
        include_values=True,
    )

    assert summary.updated_data.cell(0, 1).value == "65"
    # Table occupies rows 1-6, so the appended row lands after it
    assert summary.updates.updated_range.split("!")[-1].startswith("A7")
    assert client.get_values(expenses, "A6:B6").to_values() == [["shoes", 5]]


def test_create_spreadsheet_twice(client):
    first = client.create_spreadsheet("Foo")
    second = client.create_spreadsheet("Foo")
    assert first.id != second.id
    assert first.title == second.title == "Foo"


def test_structural_edits(client):
    ref = client.create_spreadsheet("This is spreadsheet created by unit test")
    client.update_values(ref, "A1", [["books", 30]], ValueInputOption.RAW)

    before = client.get_spreadsheet(ref)
    client.apply_batch_edits(
        ref,
        [
            AddSheet(f"AutomaticSheet{len(before.sheets)}", sheet_id=1),
            CopyPaste(
                GridRange(0, 0, 1, 0, 2),
                GridRange(1, 0, 1, 0, 2),
                PasteType.PASTE_VALUES,
            ),
            RenameSpreadsheet("Expenses - API"),
        ],
    )

    after = client.get_spreadsheet(ref)
    assert after.title == "Expenses - API"
    assert len(after.sheets) == 2
    copied = client.get_values(ref, f"'{after.sheets[1].title}'!A1:B1")
    assert copied.to_values() == [["books", 30]]
