"""OAuth credential store for Google Calendar.

Owns the on-disk token file. A token is loaded if one is there; otherwise the
installed-app flow runs in the browser and its result is written back.
"""

import json
import logging
from typing import Iterable

from calsync.config import CredentialConfig
from calsync.errors import AuthorizationError, PersistenceError

logger = logging.getLogger(__name__)

AUTHORIZED_USER = "authorized_user"


class CredentialStore:
    """Loads, obtains and persists authorized-user credentials."""

    def __init__(self, config: CredentialConfig):
        self.config = config

    @property
    def token_path(self):
        return self.config.token_path

    def load_if_exists(self):
        """Load credentials from the token file.

        Returns None on any failure: a missing file, corrupt JSON, missing
        keys and unreadable files all mean "no cached credential", and the
        caller's recovery is to authorize again.
        """
        from google.oauth2.credentials import Credentials

        try:
            info = json.loads(self.token_path.read_text())
            return Credentials.from_authorized_user_info(info, list(self.config.scopes))
        except FileNotFoundError:
            return None
        except Exception as e:
            logger.warning(f"Ignoring unusable token file {self.token_path}: {e}")
            return None

    def resolve(self, scopes: Iterable[str] | None = None):
        """Return cached credentials, or run the OAuth flow and save the result."""
        creds = self.load_if_exists()
        if creds:
            logger.debug(f"Using cached credentials from {self.token_path}")
            return creds

        scopes = list(scopes or self.config.scopes)
        secret_path = self.config.client_secret_path
        if not secret_path.exists():
            raise AuthorizationError(f"Client secret file not found: {secret_path}")

        logger.info("No cached credentials, starting browser authorization")
        try:
            creds = self._run_flow(scopes)
        except Exception as e:
            raise AuthorizationError(f"Authorization failed: {e}") from e

        if not creds:
            raise AuthorizationError("Authorization flow returned no credentials")

        self.save(creds)
        return creds

    def _run_flow(self, scopes: list[str]):
        from google_auth_oauthlib.flow import InstalledAppFlow

        flow = InstalledAppFlow.from_client_secrets_file(str(self.config.client_secret_path), scopes)
        # prompt=consent makes Google hand out a refresh token on every grant
        return flow.run_local_server(port=0, prompt="consent")

    def save(self, creds) -> None:
        """Write the authorized-user token file. Access tokens are not written."""
        secret_path = self.config.client_secret_path
        try:
            keys = json.loads(secret_path.read_text())
            key = keys.get("installed") or keys.get("web")
            client_id = key["client_id"]
            client_secret = key["client_secret"]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise PersistenceError(f"Cannot read client secret file {secret_path}: {e}") from e

        if not creds.refresh_token:
            raise PersistenceError("Credentials have no refresh token to save")

        payload = json.dumps(
            {
                "type": AUTHORIZED_USER,
                "client_id": client_id,
                "client_secret": client_secret,
                "refresh_token": creds.refresh_token,
            }
        )
        try:
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            self.token_path.write_text(payload)
            self.token_path.chmod(0o600)
        except OSError as e:
            raise PersistenceError(f"Cannot write token file {self.token_path}: {e}") from e
        logger.info(f"Saved credentials to {self.token_path}")

    def clear(self) -> bool:
        """Delete the token file. Returns True if there was one."""
        try:
            self.token_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PersistenceError(f"Cannot remove token file {self.token_path}: {e}") from e
        return True
