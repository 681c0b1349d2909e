"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import httplib2
from google.auth.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import set_user_agent

from groggy_sheets.config import get_application_name
from groggy_sheets.google import acquire_credentials
from groggy_sheets.sheets.exceptions import (
    NotFoundError,
    RemoteError,
    SheetsError,
    ValidationError,
    translate_http_error,
)
from groggy_sheets.sheets.models import (
    AppendSummary,
    BatchUpdateSummary,
    GridLike,
    InsertDataOption,
    Spreadsheet,
    SpreadsheetReference,
    StructuralEdit,
    UpdateSummary,
    ValueGrid,
    ValueInputOption,
    ValueRenderOption,
)

logger = logging.getLogger(__name__)


def _spreadsheet_id(spreadsheet: str | SpreadsheetReference) -> str:
    spreadsheet_id = (
        spreadsheet.id if isinstance(spreadsheet, SpreadsheetReference) else spreadsheet
    )
    if not spreadsheet_id:
        raise ValidationError("Spreadsheet ID must not be empty")
    return spreadsheet_id


def _require_range(range_notation: str) -> str:
    if not range_notation or not range_notation.strip():
        raise ValidationError("Range must not be empty")
    return range_notation


def _authorized_http(credentials: Credentials, application_name: str) -> AuthorizedHttp:
    """Authorized transport whose requests carry the application name."""
    return AuthorizedHttp(credentials, http=set_user_agent(httplib2.Http(), application_name))


class SheetsClient:
    """Google Sheets API client.

    The handle is built once from credentials and never changes afterwards,
    so one instance can be shared between callers.

    Usage:
        client = SheetsClient.from_config()

        ref = client.create_spreadsheet("Expenses")
        client.update_values(ref, "A1", [["books", 30], ["pens", 10]])
        grid = client.get_values(ref, "A1:B2")

        client.append_values(ref, "A1", [["Total", "=B1+B2"]], include_values=True)

    Note:
        Requires OAuth authorization. Run `groggy-sheets google login` to authorize.
    """

    def __init__(
        self,
        credentials: Credentials,
        application_name: str | None = None,
        service: Any = None,
    ) -> None:
        """Initialize Sheets client.

        Args:
            credentials: Google credentials (OAuth user or service account).
            application_name: Sent as the User-Agent of every request. Defaults
                to the configured name.
            service: Prebuilt ``sheets`` v4 resource. Built from ``credentials``
                when omitted.
        """
        self._credentials = credentials
        self._application_name = application_name or get_application_name()
        if service is None:
            service = build(
                "sheets",
                "v4",
                http=_authorized_http(credentials, self._application_name),
                cache_discovery=False,
            )
        self._service = service
        logger.info(f"Sheets client ready for {self._application_name}")

    @classmethod
    def from_config(
        cls,
        scopes: list[str] | None = None,
        application_name: str | None = None,
        token_path: str | Path | None = None,
        credentials_path: str | Path | None = None,
        service_account_path: str | Path | None = None,
    ) -> SheetsClient:
        """Acquire credentials from the configured files and build a client.

        Raises:
            AuthError: If no usable credentials are found.
        """
        credentials = acquire_credentials(
            scopes=scopes,
            token_path=token_path,
            credentials_path=credentials_path,
            service_account_path=service_account_path,
        )
        return cls(credentials, application_name=application_name)

    @property
    def application_name(self) -> str:
        return self._application_name

    def _execute(
        self,
        request: Any,
        range_error: type[SheetsError] = ValidationError,
    ) -> dict:
        """Run a prepared request, translating HTTP failures."""
        logger.info(f"Sheets API call: {getattr(request, 'methodId', 'unknown')}")
        try:
            return request.execute()
        except HttpError as e:
            raise translate_http_error(e, range_error=range_error) from e

    # =========================================================================
    # Spreadsheets
    # =========================================================================

    def create_spreadsheet(self, title: str) -> SpreadsheetReference:
        """Create a new spreadsheet.

        A new resource is created on every call, even for a title that is
        already in use.
        """
        logger.info(f"Creating spreadsheet {title!r}")
        result = self._execute(
            self._service.spreadsheets().create(body={"properties": {"title": title}})
        )
        return Spreadsheet.from_response(result).reference

    def get_spreadsheet(self, spreadsheet: str | SpreadsheetReference) -> Spreadsheet:
        """Fetch spreadsheet metadata (title, sheets, URL).

        Raises:
            NotFoundError: If the spreadsheet does not exist.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        result = self._execute(self._service.spreadsheets().get(spreadsheetId=spreadsheet_id))
        return Spreadsheet.from_response(result)

    def apply_batch_edits(
        self,
        spreadsheet: str | SpreadsheetReference,
        edits: Sequence[StructuralEdit],
    ) -> None:
        """Apply structural edits in order within one batchUpdate.

        The service applies the whole batch or none of it. That is a property
        of the remote API and is not checked here.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        if not edits:
            raise ValidationError("At least one edit is required")

        requests = [edit.to_request() for edit in edits]
        logger.info(f"Applying {len(requests)} edits to {spreadsheet_id}")
        self._execute(
            self._service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"requests": requests},
            )
        )

    # =========================================================================
    # Reading Data
    # =========================================================================

    def get_values(
        self,
        spreadsheet: str | SpreadsheetReference,
        range_notation: str,
        render: ValueRenderOption = ValueRenderOption.UNFORMATTED_VALUE,
    ) -> ValueGrid:
        """Read values from a range.

        Args:
            spreadsheet: Spreadsheet ID or reference.
            range_notation: A1 notation (e.g., "Sheet1!A2:E").
            render: How values are rendered. Unformatted by default, so
                numbers come back as numbers.

        Returns:
            The grid. Empty when the range holds no data.

        Raises:
            NotFoundError: If the spreadsheet or range does not exist.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        request = (
            self._service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=_require_range(range_notation),
                valueRenderOption=ValueRenderOption(render).value,
            )
        )
        result = self._execute(request, range_error=NotFoundError)
        return ValueGrid.of(result.get("values", []))

    def batch_get_values(
        self,
        spreadsheet: str | SpreadsheetReference,
        ranges: Sequence[str],
        render: ValueRenderOption = ValueRenderOption.UNFORMATTED_VALUE,
    ) -> list[ValueGrid]:
        """Read several ranges in one request.

        Returns:
            One grid per requested range, in request order.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        if not ranges:
            raise ValidationError("At least one range is required")
        ranges = [_require_range(r) for r in ranges]

        request = (
            self._service.spreadsheets()
            .values()
            .batchGet(
                spreadsheetId=spreadsheet_id,
                ranges=ranges,
                valueRenderOption=ValueRenderOption(render).value,
            )
        )
        result = self._execute(request, range_error=NotFoundError)
        value_ranges = result.get("valueRanges", [])
        if len(value_ranges) != len(ranges):
            raise RemoteError(
                f"Expected {len(ranges)} value ranges, service returned {len(value_ranges)}"
            )
        return [ValueGrid.of(vr.get("values", [])) for vr in value_ranges]

    # =========================================================================
    # Writing Data
    # =========================================================================

    def update_values(
        self,
        spreadsheet: str | SpreadsheetReference,
        range_notation: str,
        values: GridLike,
        input_mode: ValueInputOption = ValueInputOption.RAW,
        include_values: bool = False,
    ) -> UpdateSummary:
        """Overwrite a range. Cells are not shifted.

        Args:
            spreadsheet: Spreadsheet ID or reference.
            range_notation: A1 notation; a single cell anchors the top-left corner.
            values: Rows to write.
            input_mode: RAW writes literals, USER_ENTERED parses like typed input.
            include_values: Return the written values in ``updated_data``.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        grid = ValueGrid.of(values)
        result = self._execute(
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=_require_range(range_notation),
                valueInputOption=ValueInputOption(input_mode).value,
                includeValuesInResponse=include_values,
                body={"values": grid.to_values()},
            )
        )
        return UpdateSummary.from_response(result, spreadsheet_id)

    def batch_update_values(
        self,
        spreadsheet: str | SpreadsheetReference,
        data: Iterable[tuple[str, GridLike]],
        input_mode: ValueInputOption = ValueInputOption.USER_ENTERED,
    ) -> BatchUpdateSummary:
        """Write several ranges in one request.

        Each (range, grid) pair is applied independently. The service
        processes them in the order given.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        value_ranges = [
            {"range": _require_range(range_notation), "values": ValueGrid.of(values).to_values()}
            for range_notation, values in data
        ]
        if not value_ranges:
            raise ValidationError("At least one range is required")

        result = self._execute(
            self._service.spreadsheets()
            .values()
            .batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={
                    "valueInputOption": ValueInputOption(input_mode).value,
                    "data": value_ranges,
                },
            )
        )
        return BatchUpdateSummary.from_response(result, spreadsheet_id)

    def append_values(
        self,
        spreadsheet: str | SpreadsheetReference,
        range_notation: str,
        values: GridLike,
        input_mode: ValueInputOption = ValueInputOption.USER_ENTERED,
        insert_mode: InsertDataOption = InsertDataOption.INSERT_ROWS,
        include_values: bool = False,
    ) -> AppendSummary:
        """Append rows after the table found in ``range_notation``.

        The service finds the last non-empty row intersecting the range's
        columns and writes below it.

        Args:
            spreadsheet: Spreadsheet ID or reference.
            range_notation: Range used to locate the table (e.g., "A1").
            values: Rows to append.
            input_mode: RAW or USER_ENTERED.
            insert_mode: INSERT_ROWS pushes existing rows down, OVERWRITE writes over them.
            include_values: Return the appended values, formatted, in ``updated_data``.
        """
        spreadsheet_id = _spreadsheet_id(spreadsheet)
        grid = ValueGrid.of(values)
        result = self._execute(
            self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=_require_range(range_notation),
                valueInputOption=ValueInputOption(input_mode).value,
                insertDataOption=InsertDataOption(insert_mode).value,
                includeValuesInResponse=include_values,
                body={"values": grid.to_values()},
            )
        )
        return AppendSummary.from_response(result, spreadsheet_id)
