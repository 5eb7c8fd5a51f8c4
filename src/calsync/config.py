"""Configuration management for calsync."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CALSYNC_HOME = Path(os.environ.get("CALSYNC_HOME", Path.cwd()))
CONFIG_FILE = CALSYNC_HOME / "calsync.conf"

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"


@dataclass(frozen=True)
class CredentialConfig:
    """Where the credential store reads and writes, and what it asks for."""

    token_path: Path
    client_secret_path: Path
    scopes: tuple[str, ...] = (CALENDAR_SCOPE,)


@dataclass
class Config:
    """calsync configuration."""

    token_file: str = "token.json"
    client_secret_file: str = "credentials.json"
    scopes: list[str] = field(default_factory=lambda: [CALENDAR_SCOPE])
    calendar_id: str = "primary"
    server_host: str = "127.0.0.1"
    server_port: int = 3001
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def resolve_path(self, value: str) -> Path:
        """Expand ~ and anchor relative paths at CALSYNC_HOME."""
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = CALSYNC_HOME / path
        return path

    def credential_config(self) -> CredentialConfig:
        return CredentialConfig(
            token_path=self.resolve_path(self.token_file),
            client_secret_path=self.resolve_path(self.client_secret_file),
            scopes=tuple(self.scopes),
        )


def _split_list(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from calsync.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "token_file":
                config.token_file = value
            case "client_secret_file":
                config.client_secret_file = value
            case "scopes":
                config.scopes = _split_list(value) or config.scopes
            case "calendar_id":
                config.calendar_id = value or "primary"
            case "server_host":
                config.server_host = value
            case "server_port":
                try:
                    config.server_port = int(value)
                except ValueError:
                    logger.warning(f"Invalid SERVER_PORT {value!r}, keeping {config.server_port}")
            case "cors_origins":
                config.cors_origins = _split_list(value)

    return config
