"""Passlib-backed password hasher."""

import logging

from typing import Optional

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class PasslibPasswordHasher:
    """
    IPasswordHasher adapter on a passlib CryptContext.

    pbkdf2_sha256 is pure Python, so no native backend is needed. The
    salt and round count travel inside the hash string.

    Example:
        >>> hasher = PasslibPasswordHasher()
        >>> stored = hasher.hash("12345678")
        >>> hasher.verify("12345678", stored)
        True
    """

    def __init__(self, context: Optional[CryptContext] = None) -> None:
        self._context = context or CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            # Unknown or malformed hash format (passlib's UnknownHashError)
            logger.warning("Unrecognized password hash format")
            return False
