"""Login command and handler.

A successful login moves the user and every meal of its session to a
freshly minted token, which is returned to the caller.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.session.events import SessionReassigned
from domain.shared.ports.event_bus import IEventBus
from domain.user.services.registry import Login, UserRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginUserCommand:
    """
    Command: Authenticate by username or email.

    Exactly one of username and email must be given.
    """

    password: str
    username: Optional[str] = None
    email: Optional[str] = None

    def __repr__(self) -> str:
        return f"LoginUserCommand(username={self.username!r}, email={self.email!r})"


class LoginUserCommandHandler:
    """Handler for LoginUserCommand."""

    def __init__(self, registry: UserRegistry, event_bus: IEventBus):
        self._registry = registry
        self._event_bus = event_bus

    async def handle(self, command: LoginUserCommand) -> Login:
        """
        Execute login command.

        Returns:
            Login carrying the new token

        Raises:
            MissingIdentityKeyError: Neither username nor email
            ValidationError: Both username and email
            InvalidCredentialsError: Unknown account or wrong password
        """
        login = await self._registry.authenticate(
            password=command.password,
            username=command.username,
            email=command.email,
        )

        await self._event_bus.publish(
            SessionReassigned.create(
                user_id=str(login.user.id),
                old_token=str(login.previous_token),
                new_token=str(login.token),
            )
        )
        return login
