"""Tests for environment configuration."""

import os
from unittest.mock import patch

from paper_client.config import (
    DEFAULT_REDIRECT_URI,
    _load_env_file,
    get_credential_status,
)


class TestLoadEnvFile:
    """Test .env parsing."""

    def test_missing_file(self, tmp_path):
        """Should load nothing when the file does not exist."""
        assert _load_env_file(tmp_path / ".env") == {}

    def test_loads_values(self, tmp_path):
        """Should skip comments and strip quotes."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# Dropbox app\n"
            "DROPBOX_CLIENT_ID=app-key\n"
            "\n"
            "DROPBOX_CLIENT_SECRET=\"app secret\"\n"
            "DROPBOX_REDIRECT_URI='http://localhost:8080'\n"
            "not a pair\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            loaded = _load_env_file(env_file)

            assert loaded == {
                "DROPBOX_CLIENT_ID": "app-key",
                "DROPBOX_CLIENT_SECRET": "app secret",
                "DROPBOX_REDIRECT_URI": "http://localhost:8080",
            }
            assert os.environ["DROPBOX_CLIENT_SECRET"] == "app secret"

    def test_environment_takes_precedence(self, tmp_path):
        """Should not override variables that are already set."""
        env_file = tmp_path / ".env"
        env_file.write_text("DROPBOX_TOKEN=from-file\n")
        with patch.dict(os.environ, {"DROPBOX_TOKEN": "from-env"}, clear=True):
            loaded = _load_env_file(env_file)

            assert loaded == {}
            assert os.environ["DROPBOX_TOKEN"] == "from-env"


class TestCredentialStatus:
    """Test credential status reporting."""

    def test_nothing_configured(self):
        with patch.dict(os.environ, {}, clear=True):
            status = get_credential_status()

        assert status["token"] is False
        assert status["app"] == {
            "client_id": False,
            "client_secret": False,
            "redirect_uri": DEFAULT_REDIRECT_URI,
        }

    def test_everything_configured(self):
        env = {
            "DROPBOX_TOKEN": "tok",
            "DROPBOX_CLIENT_ID": "key",
            "DROPBOX_CLIENT_SECRET": "secret",
            "DROPBOX_REDIRECT_URI": "http://localhost:8080",
        }
        with patch.dict(os.environ, env, clear=True):
            status = get_credential_status()

        assert status["token"] is True
        assert status["app"]["client_id"] is True
        assert status["app"]["client_secret"] is True
        assert status["app"]["redirect_uri"] == "http://localhost:8080"
