"""User registry - accounts bound to session tokens.

Registration binds a new user to the caller's session; login moves the
user and every meal of that session to a freshly minted token.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Callable, Dict, List, Optional, Union
from uuid import UUID

from domain.session.identity_manager import SessionIdentityManager
from domain.session.token import SessionToken
from domain.shared.errors import FieldError, ValidationError
from domain.shared.ports.store import DuplicateRecordError, IStore, Record
from domain.user.core.entities.user import User
from domain.user.core.exceptions.user_errors import (
    InvalidCredentialsError,
    MissingIdentityKeyError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.user.core.ports.password_hasher import IPasswordHasher
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.password import check_password_policy
from domain.user.core.value_objects.username import Username

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
USER_UNIQUE_FIELDS = ("username", "email")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Registration:
    """Outcome of a registration.

    Attributes:
        user: The stored user
        token: Token the user is bound to
        token_is_new: True when the transport must set the token
    """

    user: User
    token: SessionToken
    token_is_new: bool


@dataclass(frozen=True)
class Login:
    """Outcome of a successful login.

    Attributes:
        user: The user, already re-stamped with token
        token: The new session token
        previous_token: The retired token, which now denotes nothing
    """

    user: User
    token: SessionToken
    previous_token: SessionToken


class UserRegistry:
    """
    Domain service: user identity.

    Also a token owner, so a login moves the user row together with the
    meals in the same transaction.

    Example:
        >>> registry = UserRegistry(store, identity, hasher)
        >>> reg = await registry.register("tiago", "tiago@gmail.com", "12345678", None)
        >>> login = await registry.authenticate(username="tiago", password="12345678")
        >>> login.token != reg.token
        True
    """

    owner_name = "users"

    def __init__(
        self,
        store: IStore,
        identity: SessionIdentityManager,
        hasher: IPasswordHasher,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize registry.

        Args:
            store: Persistent store port
            identity: Session identity manager (mints and reassigns tokens)
            hasher: Password hasher port
            clock: Source of "now" for timestamps
        """
        self._store = store
        self._identity = identity
        self._hasher = hasher
        self._clock = clock

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        presented_token: Optional[str],
    ) -> Registration:
        """
        Create a user bound to the caller's session.

        A token already owned by another user is not shared: a fresh one
        is minted instead and the existing user keeps the old one.

        Raises:
            ValidationError: Malformed username, email or password
            UserAlreadyExistsError: Username or email already registered
        """
        valid_username, valid_email = self._validate_registration(username, email, password)

        await self._ensure_available("username", valid_username.value)
        await self._ensure_available("email", valid_email.value)

        token, is_new = self._identity.ensure_token(presented_token)
        if not is_new and await self.owns(self._store, token):
            token, is_new = self._identity.ensure_token(None)

        user = User.create(
            valid_username,
            valid_email,
            password_hash=self._hasher.hash(password),
            session_token=str(token),
            now=self._clock(),
        )

        try:
            await self._store.insert(USERS_TABLE, user.to_record())
        except DuplicateRecordError as e:
            # Lost a race with a concurrent registration
            raise UserAlreadyExistsError(e.field, str(e.value)) from e

        logger.info(
            "User registered",
            extra={"user_id": str(user.id), "token_minted": is_new},
        )
        return Registration(user=user, token=token, token_is_new=is_new)

    async def find_by_session_token(self, token: SessionToken) -> User:
        """
        Get the user bound to token.

        Raises:
            UserNotFoundError: No user owns the token
        """
        record = await self._store.select_one_where(USERS_TABLE, {"session_token": str(token)})
        if record is None:
            raise UserNotFoundError()
        return User.from_record(record)

    async def authenticate(
        self,
        password: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Login:
        """
        Check credentials and move the user's session to a new token.

        Exactly one of username or email identifies the account.

        Raises:
            MissingIdentityKeyError: Neither username nor email supplied
            ValidationError: Both supplied
            InvalidCredentialsError: Unknown account or wrong password
        """
        if not username and not email:
            raise MissingIdentityKeyError()
        if username and email:
            raise ValidationError.single("email", "Supply either username or email, not both")

        if username:
            criteria = {"username": Username.normalize(username)}
        else:
            criteria = {"email": Email.normalize(email or "")}

        record = await self._store.select_one_where(USERS_TABLE, criteria)
        if record is None:
            logger.info("Login rejected", extra={"reason": "unknown_user"})
            raise InvalidCredentialsError()

        user = User.from_record(record)
        if not self._hasher.verify(password, user.password_hash):
            logger.info("Login rejected", extra={"reason": "bad_password", "user_id": str(user.id)})
            raise InvalidCredentialsError()

        # The token is re-read by id inside the transaction: a concurrent
        # login may already have moved the row since the lookup above
        current: Dict[str, Record] = {}

        async def _current_token(tx: IStore) -> SessionToken:
            row = await tx.select_one_where(USERS_TABLE, {"id": str(user.id)})
            if row is None:
                raise InvalidCredentialsError()
            current["row"] = row
            return SessionToken(row["session_token"])

        reassignment = await self._identity.reassign_current(_current_token)

        moved = User.from_record(
            {
                **current["row"],
                "session_token": str(reassignment.new_token),
                "updated_at": reassignment.at,
            }
        )
        return Login(
            user=moved,
            token=reassignment.new_token,
            previous_token=reassignment.old_token,
        )

    async def delete(self, user_id: Union[UUID, str]) -> None:
        """
        Delete a user by id, without any session check.

        Meals are not cascaded: they stay under the session token.

        Raises:
            UserNotFoundError: No user with that id
        """
        try:
            key = str(UUID(str(user_id)))
        except ValueError:
            raise UserNotFoundError(str(user_id)) from None

        deleted = await self._store.delete_where(USERS_TABLE, {"id": key})
        if deleted == 0:
            raise UserNotFoundError(key)

        logger.info("User deleted", extra={"user_id": key})

    async def restamp(
        self,
        store: IStore,
        old_token: SessionToken,
        new_token: SessionToken,
        at: datetime,
    ) -> int:
        """Move the user row of old_token to new_token."""
        return await store.update_where(
            USERS_TABLE,
            {"session_token": str(old_token)},
            {"session_token": str(new_token), "updated_at": at},
        )

    async def owns(self, store: IStore, token: SessionToken) -> bool:
        record = await store.select_one_where(USERS_TABLE, {"session_token": str(token)})
        return record is not None

    def _validate_registration(
        self, username: str, email: str, password: str
    ) -> "tuple[Username, Email]":
        errors: List[FieldError] = []
        valid_username: Optional[Username] = None
        valid_email: Optional[Email] = None

        try:
            valid_username = Username(username)
        except ValidationError as e:
            errors.extend(e.errors)
        try:
            valid_email = Email(email)
        except ValidationError as e:
            errors.extend(e.errors)
        try:
            check_password_policy(password)
        except ValidationError as e:
            errors.extend(e.errors)

        if errors or valid_username is None or valid_email is None:
            raise ValidationError(errors)
        return valid_username, valid_email

    async def _ensure_available(self, field: str, value: str) -> None:
        if await self._store.select_one_where(USERS_TABLE, {field: value}) is not None:
            raise UserAlreadyExistsError(field, value)
