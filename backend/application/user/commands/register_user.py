"""Register user command and handler."""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.shared.ports.event_bus import IEventBus
from domain.user.core.events.user_registered import UserRegistered
from domain.user.services.registry import Registration, UserRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisterUserCommand:
    """
    Command: Create an account bound to the caller's session.

    Attributes:
        username: Letters and dashes, at least 3 characters
        email: Email address
        password: Plaintext password (hashed before storage)
        session_token: Token carried by the request, if any
    """

    username: str
    email: str
    password: str
    session_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"RegisterUserCommand(username={self.username!r}, email={self.email!r})"


class RegisterUserCommandHandler:
    """Handler for RegisterUserCommand."""

    def __init__(self, registry: UserRegistry, event_bus: IEventBus):
        self._registry = registry
        self._event_bus = event_bus

    async def handle(self, command: RegisterUserCommand) -> Registration:
        """
        Execute register command.

        Returns:
            Registration with the user and the token it is bound to

        Raises:
            ValidationError: Malformed username, email or password
            UserAlreadyExistsError: Username or email taken
        """
        registration = await self._registry.register(
            username=command.username,
            email=command.email,
            password=command.password,
            presented_token=command.session_token,
        )

        await self._event_bus.publish(
            UserRegistered.create(
                user_id=registration.user.id,
                username=registration.user.username,
                token_minted=registration.token_is_new,
            )
        )
        return registration
