"""Session State - the current bearer token and login flag.

The token is the only persisted secret. It lives in the platform keyring
under a fixed service/account pair, is read once at start-up, written on
login and removed on logout.
"""

import logging
import threading
from typing import Optional, Protocol

import keyring
from keyring.errors import KeyringError, PasswordDeleteError


logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    def load(self) -> Optional[str]: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


class KeyringTokenStore:
    """Persist the session token in the platform keyring."""

    def __init__(self, service: str = "fitpro", account: str = "session-token") -> None:
        self.service = service
        self.account = account

    def load(self) -> Optional[str]:
        return keyring.get_password(self.service, self.account)

    def save(self, token: str) -> None:
        keyring.set_password(self.service, self.account, token)

    def clear(self) -> None:
        try:
            keyring.delete_password(self.service, self.account)
        except PasswordDeleteError:
            logger.debug("No stored token to delete")


class SessionStore:
    """Process-wide auth state, passed explicitly to whoever needs the token.

    Reads and writes of the token are guarded by a lock, so ``token_provider``
    can be called from any thread.
    """

    def __init__(self, token_store: Optional[TokenStore] = None) -> None:
        """Initialize an empty session.

        Args:
            token_store: Where the token is persisted (None keeps it in memory only)
        """
        self._token_store = token_store
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self.user_email: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token)

    def token_provider(self) -> Optional[str]:
        """Current token, for the API client to read on every request."""
        return self.token

    def restore(self) -> bool:
        """Load a persisted token, if any.

        Returns:
            True if a session was restored
        """
        if self._token_store is None:
            return False
        try:
            token = self._token_store.load()
        except KeyringError as e:
            logger.error("Failed to read stored token: %s", str(e))
            return False
        with self._lock:
            self._token = token or None
        if token:
            logger.info("Restored saved session")
        return bool(token)

    def set_logged_in(self, email: str, token: str) -> None:
        """Record a successful login and persist its token."""
        with self._lock:
            self._token = token or None
            self.user_email = email
        logger.info("Logged in: %s", email)
        if self._token_store is not None and token:
            try:
                self._token_store.save(token)
            except KeyringError as e:
                logger.error("Failed to persist token: %s", str(e))

    def logout(self) -> None:
        """Clear the session in memory and in the store."""
        with self._lock:
            email = self.user_email
            self._token = None
            self.user_email = None
        logger.info("Logged out: %s", email)
        if self._token_store is not None:
            try:
                self._token_store.clear()
            except KeyringError as e:
                logger.error("Failed to remove stored token: %s", str(e))
