"""Delete user command and handler."""

from dataclasses import dataclass

from domain.user.services.registry import UserRegistry


@dataclass(frozen=True)
class DeleteUserCommand:
    """Command: Delete a user by id. Meals are left untouched."""

    user_id: str


class DeleteUserCommandHandler:
    """Handler for DeleteUserCommand."""

    def __init__(self, registry: UserRegistry):
        self._registry = registry

    async def handle(self, command: DeleteUserCommand) -> None:
        """
        Raises:
            UserNotFoundError: No user with that id
        """
        await self._registry.delete(command.user_id)
