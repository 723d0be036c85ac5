"""Password hashing on top of Werkzeug's salted hash helpers."""

from __future__ import annotations

import secrets

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher:
    """
    Hash and verify passwords.

    :meth:`verify` always performs a full hash comparison, against a
    throwaway hash when the account has no local password, so response time
    does not reveal whether an email is registered.
    """

    def __init__(self, method: str = "scrypt") -> None:
        self.method = method
        self._dummy_hash = generate_password_hash(secrets.token_hex(16), method=method)

    def hash(self, raw: str) -> str:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        return generate_password_hash(raw, method=self.method)

    def verify(self, password_hash: str | None, raw: str) -> bool:
        """Return ``True`` only if ``raw`` matches ``password_hash``."""
        if not password_hash:
            check_password_hash(self._dummy_hash, raw)
            return False
        return bool(check_password_hash(password_hash, raw))
