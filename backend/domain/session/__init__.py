"""Session identity domain.

A session token is the only ownership key in the system: meals and
users are stamped with it, and every read or write is scoped by it.
"""

from domain.session.token import SessionToken
from domain.session.ports import ITokenOwner
from domain.session.identity_manager import SessionIdentityManager

__all__ = [
    "SessionToken",
    "ITokenOwner",
    "SessionIdentityManager",
]
