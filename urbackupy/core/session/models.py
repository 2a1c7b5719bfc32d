"""
Session data models.

Contains data classes for credentials and login session state.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Credentials:
    """
    Connection credentials for one UrBackup server.

    Anonymous login is used when either username or password is empty.

    Attributes:
        endpoint: Server URL including protocol, host and port
            (for example ``http://127.0.0.1:55414``)
        username: Web interface user name
        password: Plaintext password
    """
    endpoint: str
    username: str = ''
    password: str = field(default='', repr=False)

    @property
    def is_anonymous(self) -> bool:
        """Check if these credentials trigger anonymous login."""
        return not self.username or not self.password


@dataclass
class LoginChallenge:
    """
    Server-issued challenge returned by the ``salt`` action.

    Used once per handshake attempt and discarded after hashing.
    """
    salt: str
    iterations: int
    session_seed: str
    session: str

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> Optional['LoginChallenge']:
        """
        Build a challenge from a ``salt`` response.

        Args:
            data: Parsed JSON body

        Returns:
            LoginChallenge, or None when the server returned no salt
            (unknown username)
        """
        if not isinstance(data, dict) or 'salt' not in data:
            return None

        try:
            iterations = int(data.get('pbkdf2_rounds') or 0)
        except (TypeError, ValueError):
            iterations = 0

        return cls(
            salt=str(data['salt']),
            iterations=iterations,
            session_seed=str(data.get('rnd', '')),
            session=str(data.get('ses', ''))
        )


@dataclass
class SessionState:
    """
    Current login session of a client instance.

    Written only by the authenticator. The token is non-empty if and
    only if ``authenticated`` is True.

    Attributes:
        token: Session token (``ses``) attached to every request
        authenticated: Logged-in flag
        logged_in_at: Timestamp of the last successful login
    """
    token: str = field(default='', repr=False)
    authenticated: bool = False
    logged_in_at: Optional[datetime] = None

    @property
    def is_valid(self) -> bool:
        """Check if the session can be used without logging in again."""
        return self.authenticated and bool(self.token)

    def establish(self, token: str) -> None:
        """
        Record a successful login.

        Args:
            token: Session token returned by the server

        Raises:
            ValueError: If token is empty
        """
        if not token:
            raise ValueError("Session token must not be empty")
        self.token = token
        self.authenticated = True
        self.logged_in_at = datetime.now()

    def clear(self) -> None:
        """Reset to the logged-out state."""
        self.token = ''
        self.authenticated = False
        self.logged_in_at = None
