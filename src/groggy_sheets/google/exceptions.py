"""Google authentication exceptions."""


class AuthError(Exception):
    """Base exception for credential acquisition failures."""

    pass


class CredentialsNotFoundError(AuthError):
    """Raised when OAuth credentials file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Credentials file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console."
        )


class TokenError(AuthError):
    """Raised when there's an issue with the OAuth token."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ScopeMismatchError(AuthError):
    """Raised when token scopes don't match required scopes."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(f"Token missing required scopes: {missing_scopes}")


class AuthorizationRequired(AuthError):
    """Raised when no stored token exists and user consent is needed."""

    def __init__(self, authorization_url: str, message: str | None = None):
        self.authorization_url = authorization_url
        super().__init__(
            message
            or "OAuth authorization required. Run 'groggy-sheets google login' to authorize."
        )
