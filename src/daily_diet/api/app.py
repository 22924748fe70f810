"""FastAPI application factory."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from daily_diet.api.dependencies import get_container
from daily_diet.api.meals import router as meals_router
from daily_diet.api.users import router as users_router
from daily_diet.app_logging import configure_logging
from daily_diet.config import parse_log_level
from daily_diet.containers import AppContainer
from daily_diet.errors import DailyDietError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(parse_log_level(container.settings.log_level))
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Daily Diet")
    app.state.container = container

    app.include_router(users_router)
    app.include_router(meals_router)

    @app.exception_handler(DailyDietError)
    async def handle_app_error(_request: Request, exc: DailyDietError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, _exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(HTTPStatus.BAD_REQUEST, "body must be a JSON object")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(
            HTTPStatus(exc.status_code), str(exc.detail), headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, _exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"method": request.method, "path": request.url.path},
        )
        return _error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "an unexpected error occurred"
        )

    @app.get("/status")
    async def status_check(request: Request) -> JSONResponse:
        """Report liveness and storage connectivity."""
        try:
            snapshot = get_container(request).health_service.check()
        except Exception:
            logger.exception("Storage health check failed")
            return _error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "storage is unreachable"
            )
        return JSONResponse(status_code=HTTPStatus.OK, content=snapshot)

    return app


def _error_response(
    status: HTTPStatus, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": status.phrase, "message": message, "statusCode": int(status)},
        headers=headers,
    )
