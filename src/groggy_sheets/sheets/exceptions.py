"""Google Sheets API exceptions."""

from __future__ import annotations

import json

from googleapiclient.errors import HttpError

from groggy_sheets.google.exceptions import TokenError


class SheetsError(Exception):
    """Base exception for Sheets API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(SheetsError):
    """Spreadsheet or range does not exist."""


class ValidationError(SheetsError):
    """Malformed range, grid or request."""


class RemoteError(SheetsError):
    """Any other non-2xx response from the service."""


def _error_message(error: HttpError) -> str:
    """Pull the service's message out of an HttpError body."""
    try:
        payload = json.loads(error.content.decode("utf-8"))
        return payload["error"]["message"]
    except (ValueError, KeyError, TypeError, AttributeError):
        return str(error)


RANGE_PARSE_PREFIX = "Unable to parse range"


def translate_http_error(
    error: HttpError,
    range_error: type[SheetsError] = ValidationError,
) -> Exception:
    """Map an HttpError to the matching groggy_sheets exception.

    Args:
        error: The failure raised by ``execute()``.
        range_error: Raised for a 400 "Unable to parse range". Read paths
            pass NotFoundError, since a range on a missing sheet does not exist.

    401 becomes TokenError, so an expired or revoked token surfaces through
    the AuthError hierarchy. 403 (spreadsheet not shared) stays a RemoteError.
    """
    status = getattr(error.resp, "status", None)
    try:
        status = int(status)
    except (TypeError, ValueError):
        status = None
    message = _error_message(error)

    if status == 404:
        return NotFoundError(message, status)
    if status == 400:
        if message.startswith(RANGE_PARSE_PREFIX):
            return range_error(message, status)
        return ValidationError(message, status)
    if status == 401:
        return TokenError(f"Sheets API rejected credentials: {message}", status_code=status)
    return RemoteError(f"Sheets API error ({status}): {message}", status)
