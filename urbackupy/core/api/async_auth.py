"""
Async authentication service.

Runs the UrBackup login handshake (anonymous or salted challenge) and
owns the session state it produces.
"""
import asyncio
from typing import Optional
from dataclasses import dataclass

from .async_client import AsyncAPIClient
from ..crypto import PasswordHasher
from ..exceptions import AuthenticationError
from ..logging import get_logger
from ..session import Credentials, LoginChallenge, SessionState


@dataclass
class AuthResult:
    """Authentication result."""
    session_id: str
    username: str
    anonymous: bool


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Login is single-flight: one handshake runs at a time per client, and
    callers that were waiting while it ran share its outcome (the session
    on success, the same error on failure) instead of starting another.
    """

    def __init__(
        self,
        client: AsyncAPIClient,
        credentials: Credentials,
        session_state: Optional[SessionState] = None,
        hasher: Optional[PasswordHasher] = None
    ):
        """
        Initialize auth service.

        Args:
            client: Transport used for the handshake
            credentials: Username/password (empty means anonymous)
            session_state: Session to populate (defaults to the transport's)
            hasher: Password hasher
        """
        self._client = client
        self._credentials = credentials
        self._state = session_state if session_state is not None else client.session_state
        self._hasher = hasher or PasswordHasher()
        self._lock = asyncio.Lock()
        self._completed = 0
        self._last_error: Optional[Exception] = None
        self._logger = get_logger('urbackupy.auth')

    @property
    def session(self) -> SessionState:
        return self._state

    @property
    def is_logged_in(self) -> bool:
        """Check if a usable session exists."""
        return self._state.is_valid

    async def ensure_logged_in(self) -> bool:
        """
        Make sure the client holds a valid session, logging in if needed.

        Returns:
            True once logged in

        Raises:
            AuthenticationError: If the server rejects the login
            TransportError: If the handshake cannot reach the server
        """
        ticket = self._completed

        async with self._lock:
            if self._state.is_valid:
                return True

            if self._completed != ticket:
                # A handshake finished while we were waiting for the gate
                if self._last_error is not None:
                    raise self._last_error

            self._last_error = None
            try:
                await self._login()
            except Exception as e:
                self._state.clear()
                self._last_error = e
                raise
            finally:
                self._completed += 1

            return True

    async def login(self) -> AuthResult:
        """
        Log in (or reuse the current session).

        Returns:
            AuthResult describing the active session
        """
        await self.ensure_logged_in()
        return AuthResult(
            session_id=self._state.token,
            username=self._credentials.username,
            anonymous=self._credentials.is_anonymous
        )

    async def _login(self) -> None:
        if self._credentials.is_anonymous:
            await self._anonymous_login()
        else:
            await self._user_login()

    async def _anonymous_login(self) -> None:
        self._logger.debug("Trying anonymous login")
        response = await self._client.call('login')

        if not isinstance(response, dict) or response.get('success') is not True:
            self._logger.warning("Anonymous login failed")
            raise AuthenticationError("Anonymous login failed", 'login')

        token = str(response.get('session') or '')
        if not token:
            raise AuthenticationError("Anonymous login returned no session", 'login')

        self._state.establish(token)
        self._logger.info("Anonymous login succeeded")

    async def _user_login(self) -> None:
        username = self._credentials.username

        response = await self._client.call('salt', {'username': username})
        challenge = LoginChallenge.from_response(response)
        if challenge is None:
            self._logger.warning("Unable to get salt, invalid username")
            raise AuthenticationError(f"Unknown user: {username}", 'salt')

        hashed_password = self._hasher.hash(
            self._credentials.password,
            challenge.salt,
            challenge.iterations,
            challenge.session_seed
        )

        self._logger.debug(f"Trying user login for {username}")
        response = await self._client.call('login', {
            'username': username,
            'password': hashed_password,
            'ses': challenge.session or None
        })

        if not isinstance(response, dict) or response.get('success') is not True:
            self._logger.warning(f"User login failed for {username}, invalid password")
            raise AuthenticationError(f"Login failed for user: {username}", 'login')

        token = challenge.session or str(response.get('session') or '')
        if not token:
            raise AuthenticationError("Login returned no session", 'login')

        self._state.establish(token)
        self._logger.info(f"Logged in as {username}")

    def invalidate(self, token: Optional[str] = None) -> None:
        """
        Drop the local session; the next call logs in again.

        Args:
            token: Session the server rejected. When given, a newer session
                established since that request is kept.
        """
        if token is not None and token != self._state.token:
            self._logger.debug("Rejected session already replaced")
            return
        if self._state.authenticated:
            self._logger.debug("Session invalidated")
        self._state.clear()

    async def logout(self) -> None:
        """
        Log out on the server (if logged in) and drop the local session.

        Waits for a handshake in flight, so the session it produces is the
        one logged out.
        """
        async with self._lock:
            if not self._state.is_valid:
                self._state.clear()
                return
            try:
                await self._client.call('logout')
            finally:
                self._state.clear()
