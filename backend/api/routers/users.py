"""User endpoints: registration, summary, login and deletion."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_container, get_session_token, set_session_cookie
from api.schemas import (
    ErrorResponse,
    LoginInput,
    LoginResponse,
    PublicUser,
    RegisterUserInput,
    UserSummaryResponse,
)
from application.user.commands import DeleteUserCommand, LoginUserCommand, RegisterUserCommand
from application.user.queries import GetUserSummaryQuery
from infrastructure.container import Container

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PublicUser,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register_user(
    body: RegisterUserInput,
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> PublicUser:
    """Create an account bound to the caller's session (minted if absent)."""
    registration = await container.register_user.handle(
        RegisterUserCommand(
            username=body.username,
            email=body.email,
            password=body.password,
            session_token=session_token,
        )
    )
    if registration.token_is_new:
        set_session_cookie(response, registration.token)
    return PublicUser.from_user(registration.user)


@router.get("", response_model=UserSummaryResponse, responses={401: {"model": ErrorResponse}})
async def get_user_summary(
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> UserSummaryResponse:
    summary = await container.get_user_summary.handle(
        GetUserSummaryQuery(session_token=session_token)
    )
    return UserSummaryResponse.build(summary.adherence, summary.user)


@router.put("/login", response_model=LoginResponse, responses={401: {"model": ErrorResponse}})
async def login(
    body: LoginInput,
    response: Response,
    container: Container = Depends(get_container),
) -> LoginResponse:
    """Authenticate and move the account's session to a new token."""
    result = await container.login_user.handle(
        LoginUserCommand(password=body.password, username=body.username, email=body.email)
    )
    set_session_cookie(response, result.token)
    return LoginResponse(user=PublicUser.from_user(result.user), sessionId=str(result.token))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete_user(
    user_id: str,
    container: Container = Depends(get_container),
) -> Response:
    await container.delete_user.handle(DeleteUserCommand(user_id=user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
