"""Google Sheets API client.

Usage:
    from groggy_sheets.sheets import SheetsClient, ValueInputOption

    client = SheetsClient.from_config()

    ref = client.create_spreadsheet("Expenses")
    client.update_values(ref, "A2", [["books", 30], ["pens", 10]], ValueInputOption.RAW)
    grid = client.get_values(ref, "A2:B3")

OAuth Setup:
    1. Download OAuth credentials from Google Cloud Console
    2. Import: groggy-sheets google import ~/Downloads/credentials.json
    3. Authorize: groggy-sheets google login
"""

from __future__ import annotations

from groggy_sheets.sheets.client import SheetsClient
from groggy_sheets.sheets.exceptions import (
    NotFoundError,
    RemoteError,
    SheetsError,
    ValidationError,
)
from groggy_sheets.sheets.models import (
    AddSheet,
    AppendSummary,
    BatchUpdateSummary,
    Cell,
    CellKind,
    CopyPaste,
    GridRange,
    InsertDataOption,
    PasteType,
    RenameSpreadsheet,
    Sheet,
    Spreadsheet,
    SpreadsheetReference,
    StructuralEdit,
    UpdateSummary,
    ValueGrid,
    ValueInputOption,
    ValueRenderOption,
)

__all__ = [
    "SheetsClient",
    "SheetsError",
    "NotFoundError",
    "ValidationError",
    "RemoteError",
    "AddSheet",
    "AppendSummary",
    "BatchUpdateSummary",
    "Cell",
    "CellKind",
    "CopyPaste",
    "GridRange",
    "InsertDataOption",
    "PasteType",
    "RenameSpreadsheet",
    "Sheet",
    "Spreadsheet",
    "SpreadsheetReference",
    "StructuralEdit",
    "UpdateSummary",
    "ValueGrid",
    "ValueInputOption",
    "ValueRenderOption",
]
