"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from daily_diet.domain.sessions import Session  # noqa: TC001

if TYPE_CHECKING:
    from daily_diet.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_session(request: Request) -> Session:
    """Authenticate the session cookie and attach it to the request."""
    container = get_container(request)
    raw_token = request.cookies.get(container.settings.session_cookie_name)
    session = container.session_authenticator.authenticate(raw_token)
    request.state.session = session
    return session
