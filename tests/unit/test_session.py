"""
Unit tests for session management.

Tests SessionState, Credentials, LoginChallenge and LogCursor.
"""
import pytest

from urbackupy.core.session import (
    Credentials,
    LoginChallenge,
    SessionState,
    LogCursor
)


class TestSessionState:
    """Tests for SessionState model."""

    def test_initial_state(self):
        """Test new session is logged out."""
        state = SessionState()

        assert state.token == ''
        assert state.authenticated is False
        assert state.is_valid is False

    def test_establish(self):
        """Test establishing a session."""
        state = SessionState()
        state.establish('abc')

        assert state.token == 'abc'
        assert state.authenticated is True
        assert state.is_valid is True
        assert state.logged_in_at is not None

    def test_establish_rejects_empty_token(self):
        """Test token must be non-empty when authenticated."""
        state = SessionState()

        with pytest.raises(ValueError):
            state.establish('')

        assert state.authenticated is False

    def test_clear(self):
        """Test clearing a session."""
        state = SessionState()
        state.establish('abc')
        state.clear()

        assert state.token == ''
        assert state.authenticated is False
        assert state.logged_in_at is None

    def test_repr_hides_token(self):
        """Test token is not part of repr."""
        state = SessionState()
        state.establish('very-secret-token')

        assert 'very-secret-token' not in repr(state)


class TestCredentials:
    """Tests for Credentials model."""

    def test_user_credentials(self):
        creds = Credentials('http://host:55414', 'admin', 'secret')

        assert creds.is_anonymous is False

    @pytest.mark.parametrize('username,password', [('', ''), ('', 'secret'), ('admin', '')])
    def test_anonymous(self, username, password):
        """Test empty username or password means anonymous login."""
        assert Credentials('http://host:55414', username, password).is_anonymous is True

    def test_immutable(self):
        creds = Credentials('http://host:55414', 'admin', 'secret')

        with pytest.raises(AttributeError):
            creds.username = 'other'

    def test_repr_hides_password(self):
        assert 'secret' not in repr(Credentials('http://host:55414', 'admin', 'secret'))


class TestLoginChallenge:
    """Tests for LoginChallenge parsing."""

    def test_from_response(self):
        challenge = LoginChallenge.from_response(
            {'ses': 'S', 'salt': 'abc', 'pbkdf2_rounds': 10000, 'rnd': 'R'}
        )

        assert challenge == LoginChallenge(salt='abc', iterations=10000, session_seed='R', session='S')

    def test_missing_salt(self):
        """Test unknown username (no salt) yields None."""
        assert LoginChallenge.from_response({'ses': 'S'}) is None
        assert LoginChallenge.from_response(None) is None

    def test_missing_rounds_defaults_to_zero(self):
        challenge = LoginChallenge.from_response({'salt': 'abc', 'rnd': 'R', 'ses': 'S'})

        assert challenge.iterations == 0

    def test_string_rounds(self):
        challenge = LoginChallenge.from_response({'salt': 'abc', 'pbkdf2_rounds': '500'})

        assert challenge.iterations == 500


class TestLogCursor:
    """Tests for LogCursor."""

    def test_defaults_to_zero(self):
        cursor = LogCursor()

        assert cursor.get(3) == 0
        assert 3 not in cursor

    def test_advance(self):
        cursor = LogCursor()

        assert cursor.advance(3, [5, 9, 7]) == 9
        assert cursor.get(3) == 9
        assert 3 in cursor

    def test_never_moves_backwards(self):
        cursor = LogCursor()
        cursor.advance(3, [9])

        assert cursor.advance(3, [4]) is None
        assert cursor.get(3) == 9

    def test_empty_advance_keeps_cursor(self):
        cursor = LogCursor()
        cursor.advance(3, [9])

        assert cursor.advance(3, []) is None
        assert cursor.get(3) == 9

    def test_clients_are_independent(self):
        cursor = LogCursor()
        cursor.advance(1, [5])
        cursor.advance(2, [8])

        assert cursor.get(1) == 5
        assert cursor.get(2) == 8
        assert len(cursor) == 2

    def test_reset(self):
        cursor = LogCursor()
        cursor.advance(1, [5])
        cursor.advance(2, [8])

        cursor.reset(1)
        assert cursor.get(1) == 0
        assert cursor.get(2) == 8

        cursor.reset()
        assert len(cursor) == 0
