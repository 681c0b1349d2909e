"""Shared fixtures and canned Sheets API responses."""

import json
from unittest.mock import MagicMock, patch

import pytest

from groggy_sheets.sheets import SheetsClient

SPREADSHEET_ID = "abc123"

SHEETS_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.file",
]

_SPREADSHEET_API_RESPONSE = {
    "spreadsheetId": SPREADSHEET_ID,
    "properties": {"title": "Expenses"},
    "sheets": [
        {
            "properties": {
                "sheetId": 0,
                "title": "Sheet1",
                "index": 0,
                "gridProperties": {"rowCount": 1000, "columnCount": 26},
            }
        },
    ],
    "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/abc123/edit",
}


@pytest.fixture
def client_credentials(tmp_path):
    """OAuth client credentials file."""
    creds = {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"],
        }
    }
    creds_path = tmp_path / "credentials.json"
    with open(creds_path, "w") as f:
        json.dump(creds, f)
    return creds_path


@pytest.fixture
def sheets_token(tmp_path):
    """Stored OAuth token carrying the default Sheets scopes."""
    token = {
        "token": "test-access-token",
        "refresh_token": "test-refresh-token",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_id": "test-client-id.apps.googleusercontent.com",
        "client_secret": "test-client-secret",
        "scopes": SHEETS_SCOPES,
        "type": "Bearer",
        "expiry": "2099-01-01T00:00:00Z",
    }
    token_path = tmp_path / "token.json"
    with open(token_path, "w") as f:
        json.dump(token, f)
    return token_path


@pytest.fixture
def no_service_account():
    """Hide any service account key configured on the machine."""
    with patch("groggy_sheets.google.credentials.get_service_account_path", return_value=None):
        yield


@pytest.fixture
def service():
    """Mock ``sheets`` v4 resource."""
    return MagicMock()


@pytest.fixture
def values_api(service):
    """The ``spreadsheets().values()`` collection of the mock resource."""
    return service.spreadsheets.return_value.values.return_value


@pytest.fixture
def client(service):
    return SheetsClient(MagicMock(), application_name="Test App", service=service)


@pytest.fixture
def spreadsheet_response():
    """Canned ``spreadsheets.get`` / ``spreadsheets.create`` response."""
    return json.loads(json.dumps(_SPREADSHEET_API_RESPONSE))
