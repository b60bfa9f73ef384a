from __future__ import annotations

from passlib.context import CryptContext

from app.application.ports.password_hasher_port import PasswordHasherPort


_ARGON2_CONTEXT = CryptContext(schemes=["argon2"], deprecated="auto")


class Argon2PasswordHasher(PasswordHasherPort):
    def __init__(self, context: CryptContext = _ARGON2_CONTEXT):
        self._context = context

    def hash_password(self, password: str) -> str:
        return self._context.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        # Unknown or malformed stored hashes count as a failed login.
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False
