"""Credentials consumed from the host credential store."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from asana_hooks.config.settings import Settings

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Raised when credentials are missing or unreadable."""

    pass


@dataclass(frozen=True)
class AuthContext:
    """Bearer token and webhook signing secret for one request scope."""

    access_token: str
    secret: str = ""

    def __post_init__(self):
        if not self.access_token or not self.access_token.strip():
            raise AuthError("access token is empty")

    def bearer_token(self) -> str:
        return self.access_token

    def webhook_secret(self) -> str:
        return self.secret

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthContext":
        """Build an auth context from application settings."""
        return cls(
            access_token=settings.access_token.strip(),
            secret=_select_secret(
                settings.webhook_secret,
                settings.refresh_token,
                settings.use_refresh_token_as_secret,
            ),
        )


def _select_secret(webhook_secret: str, refresh_token: str, use_refresh_token: bool) -> str:
    if webhook_secret:
        return webhook_secret
    if use_refresh_token and refresh_token:
        # Refresh tokens rotate, so signatures break after every OAuth refresh.
        logger.warning("Using the OAuth refresh token as the webhook signing secret")
        return refresh_token
    return ""


def load_credentials(credentials_path: Path, use_refresh_token_as_secret: bool = False) -> AuthContext:
    """Load an auth context from a credentials JSON file.

    The file is the host credential store export:
    {
        "oauth_access_token": "...",
        "oauth_refresh_token": "...",
        "webhook_secret": "..."
    }

    Args:
        credentials_path: Path to the credentials file.
        use_refresh_token_as_secret: Fall back to the refresh token when no
            dedicated webhook secret is present.

    Returns:
        The auth context.

    Raises:
        AuthError: If the credentials cannot be extracted.
        FileNotFoundError: If the file doesn't exist.
    """
    try:
        data = json.loads(credentials_path.read_text())
    except json.JSONDecodeError as e:
        raise AuthError(f"Failed to parse {credentials_path.name}: {e}") from e

    if not isinstance(data, dict):
        raise AuthError(f"Expected a JSON object in {credentials_path.name}")

    token = (data.get("oauth_access_token") or "").strip()
    if not token:
        raise AuthError(f"oauth_access_token not found in {credentials_path.name}")

    return AuthContext(
        access_token=token,
        secret=_select_secret(
            data.get("webhook_secret") or "",
            data.get("oauth_refresh_token") or "",
            use_refresh_token_as_secret,
        ),
    )
