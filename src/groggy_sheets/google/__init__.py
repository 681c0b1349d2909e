"""Google OAuth and service account credentials for the Sheets API."""

from groggy_sheets.google.credentials import acquire_credentials
from groggy_sheets.google.exceptions import (
    AuthError,
    AuthorizationRequired,
    CredentialsNotFoundError,
    ScopeMismatchError,
    TokenError,
)
from groggy_sheets.google.oauth import GoogleOAuth
from groggy_sheets.google.service_account import GoogleServiceAccount

__all__ = [
    "acquire_credentials",
    "GoogleOAuth",
    "GoogleServiceAccount",
    "AuthError",
    "AuthorizationRequired",
    "CredentialsNotFoundError",
    "TokenError",
    "ScopeMismatchError",
]
