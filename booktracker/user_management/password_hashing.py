"""Pluggable password verifiers."""
from __future__ import annotations

from abc import ABC, abstractmethod

import bcrypt

# bcrypt only consumes the first 72 bytes of a password.
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher(ABC):
    """Derive and check one-way password verifiers."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a verifier string for ``password``."""

    @abstractmethod
    def verify(self, password: str, verifier: str) -> bool:
        """Return ``True`` when ``password`` matches ``verifier``."""

    @abstractmethod
    def dummy_verify(self, password: str) -> None:
        """Spend the same effort as :meth:`verify` without a stored verifier."""


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt with a per-hash random salt."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, verifier: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(password), verifier.encode("utf-8"))
        except ValueError:
            # Malformed stored hash.
            return False

    def dummy_verify(self, password: str) -> None:
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=self._rounds))
        bcrypt.checkpw(self._encode(password), self._dummy_hash)


__all__ = ["BcryptPasswordHasher", "PasswordHasher"]
