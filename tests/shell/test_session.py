"""Tests for SessionStore and the keyring-backed token store."""

import logging

from keyring.errors import KeyringError

from fitpro.shell.session import KeyringTokenStore, SessionStore


SERVICE = "fitpro-test"
ACCOUNT = "session-token"


class BrokenStore:
    """Token store whose backend is unavailable."""

    def load(self):
        raise KeyringError("locked")

    def save(self, token):
        raise KeyringError("locked")

    def clear(self):
        raise KeyringError("locked")


class TestKeyringTokenStore:
    """Tests for KeyringTokenStore."""

    def test_save_load_clear(self, fake_keyring):
        store = KeyringTokenStore(SERVICE, ACCOUNT)

        store.save("abc")
        assert fake_keyring.passwords[(SERVICE, ACCOUNT)] == "abc"
        assert store.load() == "abc"

        store.clear()
        assert store.load() is None

    def test_clear_when_empty(self, fake_keyring):
        """Deleting a missing token is not an error."""
        KeyringTokenStore(SERVICE, ACCOUNT).clear()
        assert fake_keyring.passwords == {}


class TestSessionStore:
    """Tests for SessionStore."""

    def test_starts_logged_out(self):
        session = SessionStore()
        assert session.token is None
        assert not session.is_logged_in
        assert session.token_provider() is None

    def test_login_persists_token(self, fake_keyring):
        session = SessionStore(KeyringTokenStore(SERVICE, ACCOUNT))

        session.set_logged_in("ann@example.com", "abc")

        assert session.is_logged_in
        assert session.token_provider() == "abc"
        assert session.user_email == "ann@example.com"
        assert fake_keyring.passwords[(SERVICE, ACCOUNT)] == "abc"

    def test_logout_clears_everywhere(self, fake_keyring):
        session = SessionStore(KeyringTokenStore(SERVICE, ACCOUNT))
        session.set_logged_in("ann@example.com", "abc")

        session.logout()

        assert not session.is_logged_in
        assert session.token is None
        assert session.user_email is None
        assert (SERVICE, ACCOUNT) not in fake_keyring.passwords

    def test_logout_without_login(self, fake_keyring):
        session = SessionStore(KeyringTokenStore(SERVICE, ACCOUNT))
        session.logout()
        assert not session.is_logged_in

    def test_restore(self, fake_keyring):
        fake_keyring.passwords[(SERVICE, ACCOUNT)] = "saved"
        session = SessionStore(KeyringTokenStore(SERVICE, ACCOUNT))

        assert session.restore() is True
        assert session.token == "saved"
        assert session.is_logged_in

    def test_restore_nothing_saved(self, fake_keyring):
        session = SessionStore(KeyringTokenStore(SERVICE, ACCOUNT))
        assert session.restore() is False
        assert not session.is_logged_in

    def test_memory_only(self):
        session = SessionStore()
        assert session.restore() is False
        session.set_logged_in("ann@example.com", "abc")
        assert session.token == "abc"
        session.logout()
        assert session.token is None

    def test_empty_token_is_logged_out(self, fake_keyring):
        """An empty token never counts as a session and is not stored."""
        session = SessionStore(KeyringTokenStore(SERVICE, ACCOUNT))

        session.set_logged_in("ann@example.com", "")

        assert not session.is_logged_in
        assert session.token is None
        assert fake_keyring.passwords == {}

    def test_store_failures_are_logged(self, caplog):
        """A broken keyring never blocks login or logout."""
        caplog.set_level(logging.ERROR, logger="fitpro.shell.session")
        session = SessionStore(BrokenStore())

        assert session.restore() is False
        session.set_logged_in("ann@example.com", "abc")
        assert session.token == "abc"
        session.logout()
        assert session.token is None

        assert "Failed to read stored token" in caplog.text
        assert "Failed to persist token" in caplog.text
        assert "Failed to remove stored token" in caplog.text
