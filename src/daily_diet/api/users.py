"""User registration and profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Request, Response, status

from daily_diet.api.dependencies import get_container
from daily_diet.services.validation import parse_id

if TYPE_CHECKING:
    from daily_diet.domain.users import UserRecord

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    response: Response,
    payload: dict[str, Any] | None = Body(default=None),
) -> dict[str, object]:
    """Register a user and issue its session cookie."""
    container = get_container(request)
    user = container.user_service.register(payload)
    response.set_cookie(
        container.settings.session_cookie_name,
        str(user.session_id),
        httponly=True,
        samesite="lax",
    )
    return _serialize_user(user, include_session=True)


@router.get("/{user_id}")
async def get_user(user_id: str, request: Request) -> dict[str, object]:
    """Return a user by id."""
    user = get_container(request).user_service.get_user(parse_id(user_id))
    return _serialize_user(user)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
) -> dict[str, object]:
    """Update a user's username and/or email."""
    user = get_container(request).user_service.update_user(parse_id(user_id), payload)
    return _serialize_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, request: Request) -> Response:
    """Delete a user."""
    get_container(request).user_service.delete_user(parse_id(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _serialize_user(user: UserRecord, include_session: bool = False) -> dict[str, object]:
    data: dict[str, object] = {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
    if include_session:
        data["session_id"] = str(user.session_id)
    return data
