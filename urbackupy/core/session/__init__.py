"""
Session management module.

Holds the in-memory login session and the live-log recency cursor.
Nothing is persisted beyond the lifetime of the client instance.
"""
from .models import Credentials, LoginChallenge, SessionState
from .cursor import LogCursor

__all__ = [
    'Credentials',
    'LoginChallenge',
    'SessionState',
    'LogCursor',
]
