"""Render API key storage and resolution."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from .config import CredentialsConfig
from .exceptions import ConfigError, CredentialsNotFoundError

logger = logging.getLogger(__name__)


class CredentialStore:
    """Single-key JSON file holding the persisted API key, e.g. ``{"apiKey": "rnd_..."}``."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    @classmethod
    def from_config(cls, config: CredentialsConfig) -> CredentialStore:
        return cls(config.file_path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> str | None:
        """Return the stored key, or None when the file is absent or holds no key."""
        if not self.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Could not read credentials from {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Credentials file {self.path} must contain a JSON object")

        api_key = data.get("apiKey")
        return api_key or None

    def save(self, api_key: str) -> Path:
        """Persist the key, creating the parent directory; the file is readable by the owner only."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"apiKey": api_key}, indent=2), encoding="utf-8")
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.warning("Could not restrict permissions on %s", self.path)
        logger.info("Credentials saved to %s", self.path)
        return self.path


def resolve_api_key(
    config: CredentialsConfig,
    store: CredentialStore,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the API key from the environment, then the store.

    Raises CredentialsNotFoundError when neither source has one.
    """
    environ = os.environ if environ is None else environ

    env_key = environ.get(config.env_var)
    if env_key:
        logger.debug("Using API key from $%s", config.env_var)
        return env_key

    stored = store.load()
    if stored:
        logger.debug("Using API key from %s", store.path)
        return stored

    raise CredentialsNotFoundError(
        f"API key not found. Set {config.env_var} environment variable "
        'or run "render-mcp configure"'
    )


def mask_key(api_key: str | None) -> str:
    """Masked rendering of a key for display."""
    if not api_key:
        return "Not configured"
    return "********"
