"""Installed-app OAuth for the Sheets API, built on Authlib.

The token file keeps Google's ``token.json`` layout (``token``, ``scopes``,
ISO ``expiry``) so it stays interchangeable with files written by Google's
own client libraries. Authlib works with its own layout (``access_token``,
space-separated ``scope``, epoch ``expires_at``); the helpers below convert
between the two.
"""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error
from google.oauth2.credentials import Credentials as GoogleCredentials

from groggy_sheets.config import DEFAULT_SCOPES, GOOGLE_CREDENTIALS, GOOGLE_TOKEN
from groggy_sheets.google.exceptions import (
    CredentialsNotFoundError,
    ScopeMismatchError,
    TokenError,
)

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"

SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive_readonly": "https://www.googleapis.com/auth/drive.readonly",
    "drive_file": "https://www.googleapis.com/auth/drive.file",
}


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Expand short scope names (``"sheets"``) to URLs; URLs pass through."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
            continue
        try:
            resolved.append(SCOPES[scope])
        except KeyError:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {sorted(SCOPES)}"
            ) from None
    return resolved


def read_client_secrets(path: Path) -> tuple[str, str]:
    """Client id and secret from a Cloud Console ``credentials.json``."""
    if not path.exists():
        raise CredentialsNotFoundError(str(path))

    with open(path) as f:
        data = json.load(f)

    section = data.get("installed") or data.get("web")
    if section is None:
        raise ValueError("Invalid credentials.json format. Expected 'installed' or 'web' key.")
    return section["client_id"], section["client_secret"]


def _expiry_to_epoch(expiry: Any) -> float | None:
    if isinstance(expiry, str):
        return datetime.fromisoformat(expiry.replace("Z", "+00:00")).timestamp()
    return expiry


def _epoch_to_expiry(expires_at: float | None) -> str | None:
    if not expires_at:
        return None
    moment = datetime.fromtimestamp(expires_at, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def token_from_file(data: dict[str, Any]) -> dict[str, Any]:
    """Google token file contents -> Authlib token dict."""
    return {
        "access_token": data.get("token"),
        "refresh_token": data.get("refresh_token"),
        "token_type": data.get("type", "Bearer"),
        "expires_at": _expiry_to_epoch(data.get("expiry")),
        "scope": " ".join(data.get("scopes", [])),
    }


def token_to_file(token: dict[str, Any], client_id: str, client_secret: str) -> dict[str, Any]:
    """Authlib token dict -> Google token file contents."""
    return {
        "token": token["access_token"],
        "refresh_token": token.get("refresh_token"),
        "token_uri": TOKEN_URL,
        "client_id": client_id,
        "client_secret": client_secret,
        "scopes": sorted(token.get("scope", "").split()),
        "type": token.get("token_type", "Bearer"),
        "expiry": _epoch_to_expiry(token.get("expires_at")),
    }


class GoogleOAuth:
    """User consent and stored-token handling for the Sheets scopes.

    Example:
        >>> auth = GoogleOAuth(scopes=["sheets"])
        >>> if not auth.is_authorized():
        ...     print(f"Visit: {auth.get_authorization_url()}")
        ...     auth.fetch_token(input("Paste redirect URL: "))
        >>> creds = auth.get_credentials()
    """

    def __init__(
        self,
        scopes: list[str] | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_path: str | Path | None = None,
        credentials_path: str | Path | None = None,
    ):
        """
        Args:
            scopes: Scope names or URLs. Defaults to ["sheets", "drive_file"].
            client_id: OAuth client ID; read from ``credentials_path`` if omitted.
            client_secret: OAuth client secret; read from ``credentials_path`` if omitted.
            token_path: Token file. Defaults to google/token.json.
            credentials_path: OAuth client file. Defaults to google/credentials.json.
        """
        self.token_path = Path(token_path) if token_path else GOOGLE_TOKEN
        self.credentials_path = Path(credentials_path) if credentials_path else GOOGLE_CREDENTIALS
        self.required_scopes = resolve_scopes(scopes or DEFAULT_SCOPES)

        if not client_id or not client_secret:
            client_id, client_secret = read_client_secrets(self.credentials_path)
        self.client_id = client_id
        self.client_secret = client_secret

        self.session = OAuth2Session(
            client_id=client_id,
            client_secret=client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri="http://localhost:0",
            token=self._read_token(),
            update_token=self._store_token,
            token_endpoint=TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

    def _missing_scopes(self, granted: str) -> set[str]:
        return set(self.required_scopes) - set(granted.split())

    def _read_token(self) -> dict[str, Any] | None:
        """Stored token, or None when absent, unreadable or under-scoped."""
        try:
            with open(self.token_path) as f:
                token = token_from_file(json.load(f))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Ignoring unreadable token {self.token_path}: {e}")
            return None

        missing = self._missing_scopes(token["scope"])
        if missing:
            logger.warning(f"Stored token lacks scopes {missing}; re-authorization needed")
            return None
        return token

    def _store_token(
        self,
        token: dict[str, Any],
        refresh_token: str | None = None,
        access_token: str | None = None,
    ):
        """Write ``token`` to the token file. Also Authlib's ``update_token`` hook."""
        missing = self._missing_scopes(token.get("scope", ""))
        if missing:
            raise ScopeMismatchError(missing)

        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.token_path, "w") as f:
            json.dump(token_to_file(token, self.client_id, self.client_secret), f, indent=2)
        logger.info(f"Stored OAuth token at {self.token_path}")

    def is_authorized(self) -> bool:
        """A token carrying every required scope is loaded."""
        token = self.session.token
        return bool(token) and not self._missing_scopes(token.get("scope", ""))

    def get_authorization_url(self) -> str:
        """Consent URL for the user to visit."""
        url, _state = self.session.create_authorization_url(
            AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
            include_granted_scopes="true",
        )
        return url

    def fetch_token(self, authorization_response: str) -> dict[str, Any]:
        """Exchange the redirect URL pasted back by the user for a token."""
        token = self.session.fetch_token(
            TOKEN_URL,
            authorization_response=authorization_response,
            client_secret=self.client_secret,
        )
        self._store_token(token)
        return token

    def get_credentials(self) -> GoogleCredentials:
        """Credentials for googleapiclient, refreshed first if expired.

        Raises:
            TokenError: If not authorized or the refresh is rejected.
        """
        if not self.is_authorized():
            raise TokenError("Not authorized or missing required scopes")

        token = self.session.token
        expires_at = token.get("expires_at")
        if expires_at and expires_at < time.time():
            logger.info("OAuth token expired, refreshing")
            try:
                token = self.session.refresh_token(
                    TOKEN_URL, refresh_token=token.get("refresh_token")
                )
            except OAuth2Error as e:
                raise TokenError(f"Failed to refresh token: {e}") from e

        return GoogleCredentials(
            token=token["access_token"],
            refresh_token=token.get("refresh_token"),
            token_uri=TOKEN_URL,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.required_scopes,
        )
