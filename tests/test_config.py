"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

from calsync.config import CALENDAR_SCOPE, Config, load_config


class TestLoadConfig:
    def test_defaults_when_no_file(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.scopes == [CALENDAR_SCOPE]

    def test_parses_keys(self, tmp_path):
        config_file = tmp_path / "calsync.conf"
        config_file.write_text(
            "\n".join(
                [
                    "# comment",
                    'TOKEN_FILE="~/secrets/token.json"  # quoted with comment',
                    "CLIENT_SECRET_FILE='client.json'",
                    "CALENDAR_ID=team@example.com",
                    "SERVER_PORT=8080",
                    "CORS_ORIGINS=http://localhost:3000, https://example.com",
                    "SCOPES=https://www.googleapis.com/auth/calendar.readonly",
                    "UNKNOWN_KEY=ignored",
                    "not a setting",
                ]
            )
        )

        config = load_config(config_file)

        assert config.token_file == "~/secrets/token.json"
        assert config.client_secret_file == "client.json"
        assert config.calendar_id == "team@example.com"
        assert config.server_port == 8080
        assert config.cors_origins == ["http://localhost:3000", "https://example.com"]
        assert config.scopes == ["https://www.googleapis.com/auth/calendar.readonly"]

    def test_unquoted_inline_comment_stripped(self, tmp_path):
        config_file = tmp_path / "calsync.conf"
        config_file.write_text("CALENDAR_ID=primary # default calendar")
        assert load_config(config_file).calendar_id == "primary"

    def test_invalid_port_keeps_default(self, tmp_path):
        config_file = tmp_path / "calsync.conf"
        config_file.write_text("SERVER_PORT=abc")
        assert load_config(config_file).server_port == 3001

    def test_reads_default_config_file(self, tmp_path):
        config_file = tmp_path / "calsync.conf"
        config_file.write_text("CALENDAR_ID=other")

        with patch("calsync.config.CONFIG_FILE", config_file):
            config = load_config()

        assert config.calendar_id == "other"


class TestCredentialConfig:
    def test_relative_paths_anchor_at_home(self, tmp_path):
        with patch("calsync.config.CALSYNC_HOME", tmp_path):
            creds = Config().credential_config()

        assert creds.token_path == tmp_path / "token.json"
        assert creds.client_secret_path == tmp_path / "credentials.json"
        assert creds.scopes == (CALENDAR_SCOPE,)

    def test_expands_user_path(self):
        creds = Config(token_file="~/calsync/token.json").credential_config()
        assert "~" not in str(creds.token_path)
        assert creds.token_path == Path.home() / "calsync" / "token.json"

    def test_absolute_paths_unchanged(self, tmp_path):
        creds = Config(client_secret_file=str(tmp_path / "secret.json")).credential_config()
        assert creds.client_secret_path == tmp_path / "secret.json"
