"""Session-scoped meal endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from daily_diet.api.dependencies import get_container, require_session
from daily_diet.domain.sessions import Session  # noqa: TC001
from daily_diet.services.validation import parse_id

if TYPE_CHECKING:
    from daily_diet.domain.meals import MealRecord

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("")
async def list_meals(
    request: Request, session: Session = Depends(require_session)
) -> list[dict[str, object]]:
    """Return the caller's meals, newest first."""
    meals = get_container(request).meal_service.list_meals(session)
    return [_serialize_meal(meal) for meal in meals]


@router.post("")
async def create_meal(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    session: Session = Depends(require_session),
) -> dict[str, object]:
    """Register a meal for the caller."""
    meal = get_container(request).meal_service.create_meal(session, payload)
    return _serialize_meal(meal)


@router.get("/metrics")
async def meal_metrics(
    request: Request, session: Session = Depends(require_session)
) -> dict[str, int]:
    """Return meal totals and the best on-diet streak."""
    return asdict(get_container(request).meal_service.get_metrics(session))


@router.put("/{meal_id}")
async def update_meal(
    meal_id: str,
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    session: Session = Depends(require_session),
) -> dict[str, object]:
    """Partially update one of the caller's meals."""
    meal = get_container(request).meal_service.update_meal(
        session, parse_id(meal_id), payload
    )
    return _serialize_meal(meal)


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: str, request: Request, session: Session = Depends(require_session)
) -> Response:
    """Delete one of the caller's meals."""
    get_container(request).meal_service.delete_meal(session, parse_id(meal_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _serialize_meal(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "user_id": str(meal.user_id),
        "name": meal.name,
        "description": meal.description,
        "is_on_diet": meal.is_on_diet,
        "created_at": meal.created_at.isoformat(),
        "updated_at": meal.updated_at.isoformat() if meal.updated_at else None,
    }
