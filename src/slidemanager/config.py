"""Runtime settings for slidemanager.

Precedence order for each value:
1. Explicit constructor argument
2. Environment variable
3. Built-in default (under ~/.config/slidemanager)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from slidemanager.exceptions import MalformedInputError
from slidemanager.transport import DEFAULT_TIMEOUT

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "slidemanager"
CREDENTIALS_FILE = "credentials.json"  # OAuth client secrets
TOKEN_FILE = "token.json"  # Cached authorized-user token

ENV_CONFIG_DIR = "SLIDEMANAGER_CONFIG_DIR"
ENV_CREDENTIALS = "SLIDEMANAGER_CREDENTIALS"
ENV_TOKEN_PATH = "SLIDEMANAGER_TOKEN_PATH"
ENV_TIMEOUT = "SLIDEMANAGER_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    """Resolved settings.

    Attributes:
        credentials_path: OAuth client secrets JSON downloaded from Google Cloud.
        token_path: Where the authorized-user token is cached.
        timeout: HTTP timeout in seconds.
    """

    credentials_path: Path
    token_path: Path
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def load(
        cls,
        config_dir: str | Path | None = None,
        credentials_path: str | Path | None = None,
        token_path: str | Path | None = None,
        timeout: int | None = None,
        environ: dict[str, str] | None = None,
    ) -> Settings:
        """Resolve settings from arguments, then the environment, then defaults."""
        env = os.environ if environ is None else environ

        base = Path(config_dir or env.get(ENV_CONFIG_DIR) or DEFAULT_CONFIG_DIR)
        creds = credentials_path or env.get(ENV_CREDENTIALS) or base / CREDENTIALS_FILE
        token = token_path or env.get(ENV_TOKEN_PATH) or base / TOKEN_FILE

        if timeout is None:
            raw_timeout = env.get(ENV_TIMEOUT)
            timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        elif timeout <= 0:
            raise MalformedInputError(f"timeout must be positive, got {timeout}")

        return cls(
            credentials_path=Path(creds).expanduser(),
            token_path=Path(token).expanduser(),
            timeout=timeout,
        )


def _parse_timeout(value: str) -> int:
    try:
        timeout = int(value)
    except ValueError:
        raise MalformedInputError(f"{ENV_TIMEOUT} must be an integer, got {value!r}") from None
    if timeout <= 0:
        raise MalformedInputError(f"{ENV_TIMEOUT} must be positive, got {timeout}")
    return timeout
