"""User value objects."""

from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.password import check_password_policy
from domain.user.core.value_objects.username import Username

__all__ = ["Email", "Username", "check_password_policy"]
