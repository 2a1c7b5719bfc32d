"""Tests for the login handshake and session lifecycle."""
import asyncio

import pytest

from urbackupy.core.api import AsyncAuthService
from urbackupy.core.crypto import hash_password
from urbackupy.core.exceptions import AuthenticationError, TransportError
from urbackupy.core.session import Credentials

from tests.fakes import (
    ANONYMOUS_SESSION,
    CHALLENGE_SESSION,
    ENDPOINT,
    PASSWORD,
    ROUNDS,
    SALT,
    SESSION_SEED,
    USERNAME,
    FakeTransport,
)


def make_auth(transport, username=USERNAME, password=PASSWORD):
    return AsyncAuthService(transport, Credentials(ENDPOINT, username, password))


class TestUserLogin:
    """Test suite for credentialed login."""

    @pytest.mark.asyncio
    async def test_handshake_sequence(self, transport):
        """Test salt challenge followed by hashed login."""
        auth = make_auth(transport)

        assert await auth.ensure_logged_in() is True

        assert transport.actions == ['salt', 'login']
        assert transport.calls[0][1] == {'username': USERNAME}
        assert transport.calls[1][1] == {
            'username': USERNAME,
            'password': hash_password(PASSWORD, SALT, ROUNDS, SESSION_SEED),
            'ses': CHALLENGE_SESSION,
        }
        assert auth.session.token == CHALLENGE_SESSION
        assert auth.is_logged_in is True

    @pytest.mark.asyncio
    async def test_fast_path(self, transport):
        """Test an existing session is reused without network calls."""
        auth = make_auth(transport)
        await auth.ensure_logged_in()
        transport.calls.clear()

        assert await auth.ensure_logged_in() is True
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_non_iterated_hash(self, transport, fake_server):
        """Test servers configured without PBKDF2 rounds."""
        fake_server.rounds = 0
        auth = make_auth(transport)

        assert await auth.ensure_logged_in() is True
        assert transport.calls[1][1]['password'] == hash_password(PASSWORD, SALT, 0, SESSION_SEED)

    @pytest.mark.asyncio
    async def test_unknown_username(self, transport):
        """Test missing salt is reported as an authentication error."""
        auth = make_auth(transport, username='nobody')

        with pytest.raises(AuthenticationError) as exc_info:
            await auth.ensure_logged_in()

        assert exc_info.value.action == 'salt'
        assert transport.actions == ['salt']
        assert auth.session.token == ''
        assert auth.session.authenticated is False

    @pytest.mark.asyncio
    async def test_wrong_password(self, transport):
        """Test rejected password clears the session."""
        auth = make_auth(transport, password='wrong')

        with pytest.raises(AuthenticationError):
            await auth.ensure_logged_in()

        assert transport.actions == ['salt', 'login']
        assert auth.session.token == ''
        assert auth.is_logged_in is False

    @pytest.mark.asyncio
    async def test_login_result(self, transport):
        auth = make_auth(transport)

        result = await auth.login()

        assert result.session_id == CHALLENGE_SESSION
        assert result.username == USERNAME
        assert result.anonymous is False


class TestAnonymousLogin:
    """Test suite for anonymous login."""

    @pytest.mark.asyncio
    async def test_no_salt_call(self, transport):
        """Test empty username takes the anonymous path."""
        auth = make_auth(transport, username='', password='')

        assert await auth.ensure_logged_in() is True

        assert transport.actions == ['login']
        assert transport.calls[0][1] == {}
        assert auth.session.token == ANONYMOUS_SESSION

    @pytest.mark.asyncio
    async def test_empty_password_is_anonymous(self, transport):
        auth = make_auth(transport, username='admin', password='')

        await auth.ensure_logged_in()

        assert 'salt' not in transport.actions

    @pytest.mark.asyncio
    async def test_rejected(self, transport, fake_server):
        """Test anonymous login failure raises and leaves the session empty."""
        fake_server.allow_anonymous = False
        auth = make_auth(transport, username='', password='')

        with pytest.raises(AuthenticationError):
            await auth.ensure_logged_in()

        assert auth.session.token == ''
        assert auth.session.authenticated is False

    @pytest.mark.asyncio
    async def test_success_without_session(self, transport):
        """Test a success flag without a token is not a login."""
        transport.overrides['login'] = {'success': True}
        auth = make_auth(transport, username='', password='')

        with pytest.raises(AuthenticationError):
            await auth.ensure_logged_in()

        assert auth.is_logged_in is False


class TestSingleFlight:
    """Test suite for serialized login under concurrent callers."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_handshake(self, fake_server):
        """Test two concurrent first calls produce one handshake."""
        transport = FakeTransport(fake_server, delay=0.01)
        auth = make_auth(transport)

        results = await asyncio.gather(auth.ensure_logged_in(), auth.ensure_logged_in())

        assert results == [True, True]
        assert transport.count('salt') == 1
        assert transport.count('login') == 1
        assert auth.session.token == CHALLENGE_SESSION

    @pytest.mark.asyncio
    async def test_many_concurrent_callers(self, fake_server):
        transport = FakeTransport(fake_server, delay=0.01)
        auth = make_auth(transport, username='', password='')

        await asyncio.gather(*(auth.ensure_logged_in() for _ in range(10)))

        assert transport.count('login') == 1

    @pytest.mark.asyncio
    async def test_waiters_share_failure(self, fake_server):
        """Test callers waiting on a failing handshake see its error."""
        transport = FakeTransport(fake_server, delay=0.01)
        auth = make_auth(transport, password='wrong')

        results = await asyncio.gather(
            auth.ensure_logged_in(),
            auth.ensure_logged_in(),
            return_exceptions=True
        )

        assert all(isinstance(result, AuthenticationError) for result in results)
        assert transport.count('salt') == 1
        assert transport.count('login') == 1

    @pytest.mark.asyncio
    async def test_new_call_after_failure_retries(self, transport, fake_server):
        """Test a later call runs a fresh handshake."""
        fake_server.allow_anonymous = False
        auth = make_auth(transport, username='', password='')

        with pytest.raises(AuthenticationError):
            await auth.ensure_logged_in()

        fake_server.allow_anonymous = True
        assert await auth.ensure_logged_in() is True
        assert transport.count('login') == 2

    @pytest.mark.asyncio
    async def test_gate_released_after_transport_error(self, transport):
        """Test a failing handshake does not lock out later logins."""
        transport.overrides['salt'] = [TransportError("Network error", 'salt')]
        auth = make_auth(transport)

        with pytest.raises(TransportError):
            await auth.ensure_logged_in()
        assert auth.session.authenticated is False

        assert await auth.ensure_logged_in() is True
        assert transport.count('salt') == 2


class TestLogout:
    """Test suite for session invalidation."""

    @pytest.mark.asyncio
    async def test_invalidate_forces_new_login(self, transport):
        auth = make_auth(transport)
        await auth.ensure_logged_in()

        auth.invalidate()
        assert auth.is_logged_in is False

        await auth.ensure_logged_in()
        assert transport.count('salt') == 2

    @pytest.mark.asyncio
    async def test_logout_calls_server(self, transport, fake_server):
        auth = make_auth(transport)
        await auth.ensure_logged_in()

        await auth.logout()

        assert transport.actions[-1] == 'logout'
        assert transport.calls[-1][1] == {'ses': CHALLENGE_SESSION}
        assert auth.session.token == ''
        assert CHALLENGE_SESSION not in fake_server.sessions

    @pytest.mark.asyncio
    async def test_logout_when_logged_out(self, transport):
        auth = make_auth(transport)

        await auth.logout()

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_logout_waits_for_handshake(self, fake_server):
        """Test a logout issued mid-handshake logs out the new session."""
        transport = FakeTransport(fake_server, delay=0.01)
        auth = make_auth(transport)

        login = asyncio.ensure_future(auth.ensure_logged_in())
        await asyncio.sleep(0)
        await auth.logout()

        assert await login is True
        assert auth.is_logged_in is False
        assert transport.actions == ['salt', 'login', 'logout']
        assert CHALLENGE_SESSION not in fake_server.sessions

    @pytest.mark.asyncio
    async def test_invalidate_stale_token_keeps_session(self, transport):
        """Test rejecting an old token does not drop a newer session."""
        auth = make_auth(transport)
        await auth.ensure_logged_in()

        auth.invalidate('SES-old')

        assert auth.is_logged_in is True

        auth.invalidate(CHALLENGE_SESSION)

        assert auth.is_logged_in is False
