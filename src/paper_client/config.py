"""Centralized endpoint and credential configuration.

Credentials are read from the environment. A ``.env`` file at the repo root
is loaded on import, without overriding variables that are already set:

    DROPBOX_TOKEN          - OAuth2 access token used by Dropbox()
    DROPBOX_CLIENT_ID      - app key, for the authorization flow
    DROPBOX_CLIENT_SECRET  - app secret, for code exchange
    DROPBOX_REDIRECT_URI   - redirect URI registered for the app
"""

import os
from pathlib import Path

# __file__ is src/paper_client/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = REPO_ROOT / ".env"

# Environment variable names
TOKEN_ENV = "DROPBOX_TOKEN"
CLIENT_ID_ENV = "DROPBOX_CLIENT_ID"
CLIENT_SECRET_ENV = "DROPBOX_CLIENT_SECRET"
REDIRECT_URI_ENV = "DROPBOX_REDIRECT_URI"

DEFAULT_REDIRECT_URI = "http://localhost"

# Endpoints
AUTHORIZE_URL = "https://www.dropbox.com/oauth2/authorize"
TOKEN_URL = "https://api.dropboxapi.com/oauth2/token"
AUTH_BASE_URL = "https://api.dropboxapi.com/2/auth/token/"
PAPER_DOCS_BASE_URL = "https://api.dropboxapi.com/2/paper/docs/"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Environment variables take precedence
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def get_credential_status() -> dict:
    """Get status of all configured credentials.

    Returns:
        Dictionary with credential status.
    """
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "token": bool(os.environ.get(TOKEN_ENV)),
        "app": {
            "client_id": bool(os.environ.get(CLIENT_ID_ENV)),
            "client_secret": bool(os.environ.get(CLIENT_SECRET_ENV)),
            "redirect_uri": os.environ.get(REDIRECT_URI_ENV, DEFAULT_REDIRECT_URI),
        },
    }


_loaded = _load_env_file(ENV_FILE)
