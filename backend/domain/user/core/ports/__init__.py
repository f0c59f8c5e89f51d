"""User domain ports."""

from domain.user.core.ports.password_hasher import IPasswordHasher

__all__ = ["IPasswordHasher"]
