"""CQRS Commands for the user registry."""

from .register_user import RegisterUserCommand, RegisterUserCommandHandler
from .login_user import LoginUserCommand, LoginUserCommandHandler
from .delete_user import DeleteUserCommand, DeleteUserCommandHandler

__all__ = [
    "RegisterUserCommand",
    "RegisterUserCommandHandler",
    "LoginUserCommand",
    "LoginUserCommandHandler",
    "DeleteUserCommand",
    "DeleteUserCommandHandler",
]
