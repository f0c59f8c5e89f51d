"""Meal endpoints, scoped by the session cookie."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_container, get_session_token, set_session_cookie
from api.schemas import ErrorResponse, MealInput, MealListResponse, MealResponse
from application.meal.commands import CreateMealCommand, DeleteMealCommand, UpdateMealCommand
from application.meal.queries import GetMealQuery, ListMealsQuery
from infrastructure.container import Container

router = APIRouter(prefix="/meals", tags=["meals"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_UNAUTHENTICATED = {401: {"model": ErrorResponse}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MealResponse,
    responses={400: {"model": ErrorResponse}},
)
async def create_meal(
    body: MealInput,
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> MealResponse:
    """Log a meal; a visitor without a session gets one."""
    result = await container.create_meal.handle(
        CreateMealCommand(session_token=session_token, fields=body.to_fields())
    )
    if result.token_is_new:
        set_session_cookie(response, result.token)
    return MealResponse.from_meal(result.meal)


@router.get("", response_model=MealListResponse, responses=_UNAUTHENTICATED)
async def list_meals(
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> MealListResponse:
    meals = await container.list_meals.handle(ListMealsQuery(session_token=session_token))
    return MealListResponse(
        total=len(meals),
        meals=[MealResponse.from_meal(m) for m in meals],
    )


@router.get(
    "/{meal_id}",
    response_model=MealResponse,
    responses={**_NOT_FOUND, **_UNAUTHENTICATED},
)
async def get_meal(
    meal_id: str,
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> MealResponse:
    meal = await container.get_meal.handle(GetMealQuery(session_token=session_token, meal_id=meal_id))
    return MealResponse.from_meal(meal)


@router.put(
    "/{meal_id}",
    response_model=MealResponse,
    responses={**_NOT_FOUND, **_UNAUTHENTICATED, 400: {"model": ErrorResponse}},
)
async def update_meal(
    meal_id: str,
    body: MealInput,
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> MealResponse:
    """Replace every field of a meal; id and createdAt are kept."""
    meal = await container.update_meal.handle(
        UpdateMealCommand(session_token=session_token, meal_id=meal_id, fields=body.to_fields())
    )
    return MealResponse.from_meal(meal)


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_UNAUTHENTICATED},
)
async def delete_meal(
    meal_id: str,
    session_token: Optional[str] = Depends(get_session_token),
    container: Container = Depends(get_container),
) -> Response:
    await container.delete_meal.handle(DeleteMealCommand(session_token=session_token, meal_id=meal_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
