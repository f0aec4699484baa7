from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cafehub.core.exceptions import CafeHubError
from cafehub.core.logging import get_logger
from cafehub.schemas.response import ErrorResponse
from cafehub.core.config import settings

logger = get_logger(__name__)


def cors_headers(request: Request) -> dict:
    """
    CORS headers for responses built outside CORSMiddleware.

    The catch-all handler runs in ServerErrorMiddleware, which wraps the CORS
    layer, so its 500s would otherwise be unreadable from the browser.
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}
    if "*" not in settings.CORS_ORIGINS and origin not in settings.CORS_ORIGINS:
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Vary": "Origin",
    }


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(CafeHubError)
    async def cafehub_exception_handler(request: Request, exc: CafeHubError):
        if exc.status_code >= 500:
            logger.error(
                f"{exc.code}: {exc.message}",
                extra={"method": request.method, "path": request.url.path}
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=exc.message,
                code=exc.code,
                error=exc.details
            ).model_dump()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=str(exc.detail),
                code="HTTP_ERROR"
            ).model_dump()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles malformed request bodies (non-JSON or wrong top-level type).
        """
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                message="Input validation failed",
                code="VALIDATION_ERROR",
                error=jsonable_encoder(exc.errors())
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for downstream failures no handler caught.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = "An internal error occurred. Please try again later." if settings.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                message=message,
                code="INTERNAL_ERROR",
                error=None if settings.is_production else type(exc).__name__
            ).model_dump(),
            headers=cors_headers(request)
        )
