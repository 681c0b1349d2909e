"""Centralized configuration for groggy-sheets.

Credentials live in the repo root:
    .env                            - overrides (GROGGY_SHEETS_APPLICATION_NAME, ...)
    google/credentials.json         - Google OAuth client credentials
    google/token.json               - Google OAuth tokens
    google/service_account_key.json - Google service account key

The .env file is loaded on import. Variables already present in the
environment take precedence over the file.
"""

import os
from pathlib import Path

# __file__ is src/groggy_sheets/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
GOOGLE_DIR = REPO_ROOT / "google"

ENV_FILE = REPO_ROOT / ".env"
GOOGLE_CREDENTIALS = GOOGLE_DIR / "credentials.json"
GOOGLE_TOKEN = GOOGLE_DIR / "token.json"
GOOGLE_SERVICE_ACCOUNT = GOOGLE_DIR / "service_account_key.json"

DEFAULT_APPLICATION_NAME = "Groggyman Sheets Example"

# Public sample sheet used by the Google quickstart
SAMPLE_SPREADSHEET_ID = "1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms"
SAMPLE_RANGE = "Class Data!A2:E"

DEFAULT_SCOPES = ["sheets", "drive_file"]


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def get_application_name() -> str:
    """Application name reported to the Sheets API."""
    return os.environ.get("GROGGY_SHEETS_APPLICATION_NAME") or DEFAULT_APPLICATION_NAME


def get_service_account_path() -> Path | None:
    """Locate a service account key, if one is configured.

    ``GOOGLE_APPLICATION_CREDENTIALS`` wins over the repo-local key file.
    """
    env_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    if env_path:
        return Path(env_path).expanduser()
    if GOOGLE_SERVICE_ACCOUNT.exists():
        return GOOGLE_SERVICE_ACCOUNT
    return None


def ensure_google_dir() -> Path:
    """Create google credentials directory if it doesn't exist.

    Returns:
        Path to google directory.
    """
    GOOGLE_DIR.mkdir(parents=True, exist_ok=True)
    return GOOGLE_DIR


def get_config_status() -> dict:
    """Get status of configured credentials.

    Returns:
        Dictionary with credential status.
    """
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "application_name": get_application_name(),
        "google": {
            "credentials": GOOGLE_CREDENTIALS.exists(),
            "token": GOOGLE_TOKEN.exists(),
            "service_account": get_service_account_path() is not None,
        },
    }


_loaded = _load_env_file(ENV_FILE)
