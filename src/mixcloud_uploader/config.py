from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mixcloud_uploader.errors import ConfigError, CredentialsError
from mixcloud_uploader.models import Configuration

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
DEFAULT_REDIRECT_URI = "https://test.icedream.tech"


def load_local_env_file(env_path: str = ".env") -> None:
    """Load key=value pairs from a local .env file into process env.

    Existing environment variables are preserved and not overwritten.
    """

    path = Path(env_path)
    if not path.is_file():
        return

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        value = value.strip().strip('"').strip("'")

        if key and key not in os.environ:
            os.environ[key] = value


@dataclass(frozen=True, slots=True)
class OAuthCredentials:
    client_id: str
    client_secret: str
    redirect_uri: str = DEFAULT_REDIRECT_URI


def oauth_credentials_from_env() -> OAuthCredentials:
    missing = [name for name in ("MIXCLOUD_CLIENT_ID", "MIXCLOUD_CLIENT_SECRET") if not os.getenv(name)]
    if missing:
        missing_list = ", ".join(missing)
        raise CredentialsError(
            f"Missing Mixcloud OAuth credentials: {missing_list}. "
            "Set them in environment variables or local .env file."
        )
    return OAuthCredentials(
        client_id=os.environ["MIXCLOUD_CLIENT_ID"],
        client_secret=os.environ["MIXCLOUD_CLIENT_SECRET"],
        redirect_uri=os.getenv("MIXCLOUD_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
    )


def default_config_dir() -> Path:
    return Path.home() / ".mixcloud"


class ConfigStore:
    """Reads and writes the uploader's ``config.json``."""

    def __init__(self, config_dir: str | Path | None = None) -> None:
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()

    @property
    def path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def ensure_dir(self) -> None:
        if self.config_dir.exists():
            return
        try:
            self.config_dir.mkdir(mode=0o700, parents=True)
        except OSError as exc:
            raise ConfigError(f"Unable to create configuration directory {self.config_dir}: {exc}") from exc

    def load(self) -> Configuration | None:
        """Return the stored configuration, or None when absent or unreadable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No configuration at %s", self.path)
            return None
        except OSError as exc:
            raise ConfigError(f"Error reading config file {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring invalid configuration file %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring invalid configuration file %s: not a JSON object", self.path)
            return None
        return Configuration.from_json_dict(data)

    def save(self, configuration: Configuration) -> None:
        self.ensure_dir()
        try:
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(configuration.to_json_dict(), fh)
                fh.write("\n")
            os.chmod(self.path, 0o600)
        except OSError as exc:
            raise ConfigError(f"Unable to save configuration file {self.path}: {exc}") from exc
        logger.debug("Configuration written to %s", self.path)
