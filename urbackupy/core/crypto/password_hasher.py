"""Session-bound password hashing for the UrBackup login handshake."""
from Crypto.Hash import MD5, SHA256
from Crypto.Protocol.KDF import PBKDF2


def _to_bytes(value: str | bytes) -> bytes:
    return value if isinstance(value, bytes) else value.encode('utf-8')


class PasswordHasher:
    """
    Derives the one-time login credential sent with the ``login`` action.

    The server stores ``MD5(salt || password)`` optionally strengthened with
    PBKDF2-HMAC-SHA256; the client proves knowledge of it by hashing it
    together with the per-session random value from the challenge.

    Example:
        >>> hasher = PasswordHasher()
        >>> hasher.hash('secret', 'salt', 10000, 'rnd')
        '5f4d...'
    """

    key_size = 32

    def hash(
        self,
        password: str | bytes,
        salt: str | bytes,
        iterations: int,
        session_seed: str | bytes
    ) -> str:
        """
        Hash a password for one login attempt.

        Args:
            password: Plaintext password
            salt: Salt stored on the server for this user
            iterations: PBKDF2 rounds configured on the server (0 disables PBKDF2)
            session_seed: Random value issued with the challenge

        Returns:
            Lowercase hex digest to submit as the login password
        """
        salt = _to_bytes(salt)
        session_seed = _to_bytes(session_seed)

        stage1 = MD5.new(salt + _to_bytes(password)).digest()

        if iterations > 0:
            stage2 = PBKDF2(
                stage1,
                salt,
                dkLen=self.key_size,
                count=iterations,
                hmac_hash_module=SHA256
            )
            return MD5.new(session_seed + stage2.hex().encode('ascii')).hexdigest()

        return MD5.new(session_seed + stage1).hexdigest()


def hash_password(
    password: str | bytes,
    salt: str | bytes,
    iterations: int,
    session_seed: str | bytes
) -> str:
    """Convenience wrapper around :meth:`PasswordHasher.hash`."""
    return PasswordHasher().hash(password, salt, iterations, session_seed)
