"""
Password hashing for the login handshake.
"""
from .password_hasher import PasswordHasher, hash_password

__all__ = [
    'PasswordHasher',
    'hash_password',
]
