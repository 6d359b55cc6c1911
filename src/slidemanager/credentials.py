"""Credentials management for Google API access.

Uses the OAuth installed-app flow: client secrets are read from
``credentials.json`` and the resulting authorized-user token is cached in
``token.json`` with secure file permissions (directory 0700, file 0600).
The interactive browser handshake only runs when no usable token exists.
"""

from __future__ import annotations

import json
import logging
import stat
from pathlib import Path

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from slidemanager.config import Settings
from slidemanager.exceptions import CredentialsError, LocalWriteError

logger = logging.getLogger(__name__)

SCOPES = [
    # Read and edit presentations
    "https://www.googleapis.com/auth/presentations",
    # Create/move files this tool created
    "https://www.googleapis.com/auth/drive.file",
    # Export any presentation the user can read
    "https://www.googleapis.com/auth/drive.readonly",
]


class CredentialsManager:
    """Obtains authorized credentials for the Slides and Drive APIs.

    Example:
        manager = CredentialsManager(Settings.load())
        creds = manager.get_credentials()
        transport = GoogleSlidesTransport(access_token=creds.token)
    """

    def __init__(self, settings: Settings, scopes: list[str] | None = None) -> None:
        self._settings = settings
        self._scopes = scopes or list(SCOPES)

    @property
    def token_path(self) -> Path:
        """Return the path where tokens are cached."""
        return self._settings.token_path

    def get_credentials(self, force_refresh: bool = False) -> Credentials:
        """Return valid credentials, refreshing or re-authorizing as needed.

        Args:
            force_refresh: If True, ignore the cached token and re-authorize.

        Raises:
            CredentialsError: If no valid credentials can be obtained.
            LocalWriteError: If the token cannot be cached.
        """
        creds = None if force_refresh else self._load_cached_token()

        if creds and creds.valid:
            logger.debug("Using cached token from %s", self.token_path)
            return creds

        if creds and creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except GoogleAuthError as e:
                logger.debug("Token refresh failed: %s", e)
                creds = self._authorize()
        else:
            creds = self._authorize()

        self._save_token(creds)
        return creds

    def clear(self) -> bool:
        """Delete the cached token. Returns True if a token was removed."""
        if not self.token_path.exists():
            return False
        try:
            self.token_path.unlink()
        except OSError as e:
            raise LocalWriteError(str(self.token_path), e.strerror or str(e)) from e
        return True

    def _load_cached_token(self) -> Credentials | None:
        """Load the cached token, or None if missing or unreadable."""
        if not self.token_path.exists():
            return None

        try:
            info = json.loads(self.token_path.read_text(encoding="utf-8"))
            return Credentials.from_authorized_user_info(info, self._scopes)  # type: ignore[no-any-return]
        except (json.JSONDecodeError, ValueError, OSError) as e:
            logger.warning("Ignoring invalid cached token %s: %s", self.token_path, e)
            return None

    def _authorize(self) -> Credentials:
        """Run the interactive browser authorization flow."""
        secrets = self._settings.credentials_path
        if not secrets.exists():
            raise CredentialsError(
                f"OAuth client secrets not found at {secrets}. "
                "Download an OAuth client (Desktop app) JSON from Google Cloud "
                "Console and save it there."
            )

        try:
            flow = InstalledAppFlow.from_client_secrets_file(str(secrets), self._scopes)
            creds = flow.run_local_server(port=0)
        except (GoogleAuthError, OAuth2Error, ValueError, OSError) as e:
            raise CredentialsError(f"Authorization failed: {e}") from e

        if creds is None:
            raise CredentialsError("Authorization failed: no credentials returned")
        return creds  # type: ignore[no-any-return]

    def _save_token(self, creds: Credentials) -> None:
        """Save token to cache file with secure permissions."""
        path = self.token_path
        try:
            # Create parent directory with secure permissions (0700)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.parent.chmod(stat.S_IRWXU)

            # Write to temp file, set permissions, then rename atomically
            temp_path = path.with_suffix(".tmp")
            temp_path.write_text(creds.to_json(), encoding="utf-8")
            temp_path.chmod(stat.S_IRUSR | stat.S_IWUSR)  # 0600
            temp_path.replace(path)
        except OSError as e:
            raise LocalWriteError(str(path), e.strerror or str(e)) from e
        logger.debug("Token saved to %s", path)
