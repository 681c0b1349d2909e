"""Google Sheets API quickstart: credentials, a client facade and a read demo."""

from groggy_sheets.google import AuthError, acquire_credentials
from groggy_sheets.sheets import (
    NotFoundError,
    RemoteError,
    SheetsClient,
    SheetsError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "acquire_credentials",
    "SheetsClient",
    "AuthError",
    "SheetsError",
    "NotFoundError",
    "ValidationError",
    "RemoteError",
]
