"""CLI for groggy-sheets.

Usage:
    groggy-sheets init                        # Create directories, show setup instructions
    groggy-sheets status                      # Show credential and token status
    groggy-sheets quickstart                  # Print names and majors from the sample sheet
    groggy-sheets google login                # Interactive OAuth login
    groggy-sheets google import <path>        # Import OAuth client credentials
    groggy-sheets google import-key <path>    # Import service account key
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
import webbrowser
from collections.abc import Callable
from pathlib import Path

DEFAULT_SCOPE_STR = "sheets,drive_file"


def cmd_init() -> int:
    """Initialize the credential directory structure."""
    from groggy_sheets.config import (
        ENV_FILE,
        GOOGLE_CREDENTIALS,
        GOOGLE_DIR,
        GOOGLE_SERVICE_ACCOUNT,
        GOOGLE_TOKEN,
        REPO_ROOT,
        ensure_google_dir,
        get_config_status,
    )

    print("=" * 60)
    print("GROGGY-SHEETS SETUP")
    print("=" * 60)
    print()
    print(f"Repository: {REPO_ROOT}")
    print()

    ensure_google_dir()
    print(f"Created: {GOOGLE_DIR}/")
    print()

    print("Credential locations:")
    print()
    print(f"  {ENV_FILE}")
    print("    Optional: GROGGY_SHEETS_APPLICATION_NAME, GOOGLE_APPLICATION_CREDENTIALS")
    print()
    print(f"  {GOOGLE_CREDENTIALS}")
    print("    OAuth client credentials from Google Cloud Console")
    print()
    print(f"  {GOOGLE_TOKEN}")
    print("    OAuth tokens (created by 'groggy-sheets google login')")
    print()
    print(f"  {GOOGLE_SERVICE_ACCOUNT}")
    print("    Service account key from Google Cloud Console")
    print()
    print("-" * 60)
    print()

    status = get_config_status()
    if status["google"]["credentials"]:
        print("Google credentials.json exists")
    else:
        print("For Google OAuth, download credentials from:")
        print("  https://console.cloud.google.com/apis/credentials")
        print(f"  Save as: {GOOGLE_CREDENTIALS}")
        print()

    return 0


def _token_state(scopes: list[str]) -> str:
    """Short summary of the stored OAuth token for ``scopes``."""
    from groggy_sheets.google import CredentialsNotFoundError, GoogleOAuth

    try:
        auth = GoogleOAuth(scopes=scopes)
    except (CredentialsNotFoundError, ValueError):
        return "no OAuth client"
    if not auth.token_path.exists():
        return "missing"
    return "authorized" if auth.is_authorized() else "needs login"


def cmd_status(scopes: list[str]) -> int:
    """Show status of configured credentials."""
    from groggy_sheets.config import get_config_status

    status = get_config_status()
    google = status["google"]

    def mark(present: bool) -> str:
        return "[x]" if present else "[ ]"

    print("=" * 60)
    print("GROGGY-SHEETS CREDENTIAL STATUS")
    print("=" * 60)
    print()
    print(f"Repository:  {status['repo_root']}")
    print(f"Application: {status['application_name']}")
    print(f".env:        {mark(status['env_file'])}")
    print()
    print("Google:")
    print(f"  credentials.json:       {mark(google['credentials'])}")
    print(f"  token.json:             {mark(google['token'])}")
    print(f"  service_account_key:    {mark(google['service_account'])}")
    print()
    print(f"OAuth token ({', '.join(scopes)}): {_token_state(scopes)}")
    print()

    return 0


def cmd_quickstart(spreadsheet_id: str, range_notation: str, scopes: list[str]) -> int:
    """Read the sample range and print names and majors."""
    from groggy_sheets import quickstart
    from groggy_sheets.google import AuthError, AuthorizationRequired
    from groggy_sheets.sheets import SheetsClient, SheetsError

    try:
        client = SheetsClient.from_config(scopes=scopes)
        quickstart.run(client, spreadsheet_id, range_notation)
    except AuthorizationRequired as e:
        print(f"Error: {e}")
        print(f"Authorization URL:\n{e.authorization_url}")
        return 1
    except (AuthError, SheetsError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def google_login(scopes: list[str], no_browser: bool = False) -> int:
    """Run the consent flow unless a usable token is already stored."""
    from authlib.oauth2 import OAuth2Error

    from groggy_sheets.google import AuthError, CredentialsNotFoundError, GoogleOAuth

    try:
        auth = GoogleOAuth(scopes=scopes)
    except CredentialsNotFoundError as e:
        print(f"Error: {e}")
        print("Run 'groggy-sheets init' for setup instructions")
        return 1

    if auth.is_authorized():
        try:
            auth.get_credentials()
        except AuthError as e:
            print(f"Stored token unusable ({e}); asking for consent again")
        else:
            print(f"Already authorized for: {', '.join(scopes)}")
            return 0

    url = auth.get_authorization_url()
    print(f"Grant access to {', '.join(scopes)} at:\n{url}\n")
    print("Then paste the URL your browser was redirected to.")
    if not no_browser:
        webbrowser.open(url)

    redirect_url = input("Redirect URL: ").strip()
    if not redirect_url:
        print("No URL provided; aborting.")
        return 1

    try:
        auth.fetch_token(redirect_url)
    except (OAuth2Error, AuthError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Token saved to {auth.token_path}")
    return 0


def _oauth_client_problem(data: dict) -> str | None:
    if "installed" in data or "web" in data:
        return None
    return "expected an 'installed' or 'web' section"


def _service_account_problem(data: dict) -> str | None:
    if data.get("type") == "service_account":
        return None
    return f"expected type 'service_account', got {data.get('type')!r}"


def _install_json(
    source_path: str,
    destination: Path,
    problem: Callable[[dict], str | None],
) -> dict | None:
    """Validate a downloaded JSON file and copy it into the google/ directory."""
    from groggy_sheets.config import ensure_google_dir

    source = Path(source_path).expanduser()
    try:
        with open(source) as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {source}")
        return None
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {source}: {e}")
        return None

    reason = problem(data)
    if reason:
        print(f"Error: {source}: {reason}")
        return None

    ensure_google_dir()
    shutil.copy2(source, destination)
    print(f"Copied {source} -> {destination}")
    return data


def google_import(source_path: str) -> int:
    """Install OAuth client credentials downloaded from Cloud Console."""
    from groggy_sheets import config

    data = _install_json(source_path, config.GOOGLE_CREDENTIALS, _oauth_client_problem)
    if data is None:
        return 1
    client = data.get("installed") or data.get("web") or {}
    print(f"OAuth client: {client.get('client_id', 'unknown')}")
    print("Next: groggy-sheets google login")
    return 0


def google_import_key(source_path: str) -> int:
    """Install a service account key."""
    from groggy_sheets import config

    data = _install_json(source_path, config.GOOGLE_SERVICE_ACCOUNT, _service_account_problem)
    if data is None:
        return 1
    print(f"Service account: {data.get('client_email', 'unknown')}")
    print("Share each spreadsheet with that address before reading it.")
    return 0


def parse_scopes(scope_str: str | None) -> list[str]:
    """Parse comma-separated scopes."""
    if not scope_str:
        scope_str = DEFAULT_SCOPE_STR
    return [s.strip() for s in scope_str.split(",") if s.strip()]


def _add_scopes_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--scopes",
        type=str,
        default=DEFAULT_SCOPE_STR,
        help=f"Comma-separated scopes (default: {DEFAULT_SCOPE_STR})",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from groggy_sheets.config import SAMPLE_RANGE, SAMPLE_SPREADSHEET_ID

    parser = argparse.ArgumentParser(
        prog="groggy-sheets",
        description="Google Sheets API quickstart and credential management",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("init", help="Initialize credential directories")
    _add_scopes_argument(subparsers.add_parser("status", help="Show credential status"))

    quickstart_parser = subparsers.add_parser(
        "quickstart", help="Print names and majors from a spreadsheet"
    )
    quickstart_parser.add_argument("--spreadsheet-id", default=SAMPLE_SPREADSHEET_ID)
    quickstart_parser.add_argument("--range", dest="range_notation", default=SAMPLE_RANGE)
    _add_scopes_argument(quickstart_parser)

    google_parser = subparsers.add_parser("google", help="Google credential setup")
    google_subparsers = google_parser.add_subparsers(dest="google_command", help="Command")

    login_parser = google_subparsers.add_parser("login", help="Interactive OAuth login")
    _add_scopes_argument(login_parser)
    login_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    import_parser = google_subparsers.add_parser("import", help="Import OAuth credentials")
    import_parser.add_argument("path", help="Path to credentials.json file")

    import_key_parser = google_subparsers.add_parser(
        "import-key", help="Import service account key"
    )
    import_key_parser.add_argument("path", help="Path to service account JSON key file")

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "init":
        return cmd_init()

    if args.command == "status":
        return cmd_status(parse_scopes(args.scopes))

    if args.command == "quickstart":
        return cmd_quickstart(
            args.spreadsheet_id, args.range_notation, parse_scopes(args.scopes)
        )

    if args.command == "google":
        if args.google_command == "login":
            return google_login(parse_scopes(args.scopes), args.no_browser)
        if args.google_command == "import":
            return google_import(args.path)
        if args.google_command == "import-key":
            return google_import_key(args.path)
        google_parser.print_help()
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
