"""Credential acquisition for the Sheets API.

Picks a service account when one is configured and no user token is
stored, and the stored OAuth token otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path

from google.auth.credentials import Credentials

from groggy_sheets.config import GOOGLE_TOKEN, get_service_account_path
from groggy_sheets.google.exceptions import AuthorizationRequired
from groggy_sheets.google.oauth import GoogleOAuth
from groggy_sheets.google.service_account import GoogleServiceAccount

logger = logging.getLogger(__name__)


def acquire_credentials(
    scopes: list[str] | None = None,
    token_path: str | Path | None = None,
    credentials_path: str | Path | None = None,
    service_account_path: str | Path | None = None,
) -> Credentials:
    """Obtain credentials for the Sheets API.

    Args:
        scopes: Scope names or URLs. Defaults to ["sheets", "drive_file"].
        token_path: OAuth token file. Defaults to google/token.json.
        credentials_path: OAuth client file. Defaults to google/credentials.json.
        service_account_path: Service account key file. When given, it is
            always used.

    Returns:
        Credentials usable with googleapiclient.

    Raises:
        AuthorizationRequired: If no stored token carries the required scopes.
        CredentialsNotFoundError: If the OAuth client or key file is missing.
        TokenError: If an expired token cannot be refreshed.
    """
    if service_account_path is not None:
        return GoogleServiceAccount(key_path=service_account_path, scopes=scopes).credentials

    token_file = Path(token_path) if token_path else GOOGLE_TOKEN
    if not token_file.exists():
        key_path = get_service_account_path()
        if key_path is not None:
            logger.info(f"No OAuth token, using service account key {key_path}")
            return GoogleServiceAccount(key_path=key_path, scopes=scopes).credentials

    auth = GoogleOAuth(
        scopes=scopes,
        token_path=token_file,
        credentials_path=credentials_path,
    )
    if not auth.is_authorized():
        raise AuthorizationRequired(
            auth.get_authorization_url(),
            "Sheets API requires OAuth authorization. "
            "Run 'groggy-sheets google login' to authorize.",
        )
    return auth.get_credentials()
