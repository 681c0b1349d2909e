"""Google Service Account authentication.

A service account reads and writes only the spreadsheets that were shared
with its email address. No user interaction is involved.

Example:
    >>> auth = GoogleServiceAccount(key_path="service_account_key.json")
    >>> creds = auth.credentials
"""

import json
import logging
from pathlib import Path

from google.oauth2 import service_account

from groggy_sheets.config import DEFAULT_SCOPES, GOOGLE_SERVICE_ACCOUNT
from groggy_sheets.google.exceptions import AuthError, CredentialsNotFoundError
from groggy_sheets.google.oauth import resolve_scopes

logger = logging.getLogger(__name__)


class GoogleServiceAccount:
    """Service account credentials loaded from a JSON key file."""

    def __init__(
        self,
        key_path: str | Path | None = None,
        scopes: list[str] | None = None,
    ):
        """Initialize service account authentication.

        Args:
            key_path: Path to service account JSON key file.
                      Defaults to google/service_account_key.json.
            scopes: Scope names (e.g., ["sheets"]) or full URLs.

        Raises:
            CredentialsNotFoundError: If key file not found.
            AuthError: If key file is invalid.
        """
        self.key_path = Path(key_path) if key_path else GOOGLE_SERVICE_ACCOUNT

        if not self.key_path.exists():
            raise CredentialsNotFoundError(str(self.key_path))

        self.scopes = resolve_scopes(scopes or DEFAULT_SCOPES)

        try:
            with open(self.key_path) as f:
                key_data = json.load(f)
        except json.JSONDecodeError as e:
            raise AuthError(f"Invalid JSON in key file: {e}") from e

        if key_data.get("type") != "service_account":
            raise AuthError(
                f"Invalid key file: expected type 'service_account', "
                f"got '{key_data.get('type')}'"
            )

        self.client_email = key_data.get("client_email", "")
        self.project_id = key_data.get("project_id", "")

        try:
            self._credentials = service_account.Credentials.from_service_account_info(
                key_data,
                scopes=self.scopes,
            )
        except ValueError as e:
            raise AuthError(f"Invalid service account key: {e}") from e

        logger.info(f"Service account initialized: {self.client_email}")

    @property
    def credentials(self) -> service_account.Credentials:
        """Get the service account credentials."""
        return self._credentials

    @property
    def email(self) -> str:
        """Service account email. Share spreadsheets with this address."""
        return self.client_email

    def with_subject(self, subject_email: str) -> "GoogleServiceAccount":
        """Impersonate a Workspace user (requires domain-wide delegation).

        Args:
            subject_email: Email of the user to impersonate.

        Returns:
            New GoogleServiceAccount instance with delegated credentials.
        """
        new_instance = object.__new__(GoogleServiceAccount)
        new_instance.key_path = self.key_path
        new_instance.scopes = self.scopes
        new_instance.client_email = self.client_email
        new_instance.project_id = self.project_id
        new_instance._credentials = self._credentials.with_subject(subject_email)

        logger.info(f"Created delegated credentials for: {subject_email}")
        return new_instance

    def get_info(self) -> dict:
        """Get information about the service account."""
        return {
            "type": "service_account",
            "email": self.client_email,
            "project_id": self.project_id,
            "scopes": self.scopes,
            "key_path": str(self.key_path),
        }
