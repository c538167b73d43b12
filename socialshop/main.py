from __future__ import annotations

from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from socialshop.core.errors import AppError
from socialshop.core.logging import configure_logging
from socialshop.core.settings import S
from socialshop.metrics import metrics_endpoint, metrics_middleware, set_app_info
from socialshop.routers.addresses import router as addresses_router
from socialshop.routers.feelings import router as feelings_router
from socialshop.routers.misc import router as misc_router
from socialshop.routers.orders import router as orders_router

logger = structlog.get_logger(__name__)


def _request_context(request: Request) -> Dict[str, Any]:
    state = getattr(request, "state", None)
    return {
        "method": request.method,
        "path": request.url.path,
        "user_id": getattr(state, "user_id", None),
    }


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    cause = exc.__cause__
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        status_code=exc.status_code,
        error=exc.message,
        error_type=type(exc).__name__,
        cause=repr(cause) if cause is not None else None,
        **_request_context(request),
    )
    return _error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("request_rejected", status_code=exc.status_code, error=str(exc.detail), **_request_context(request))
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{where}: {first.get('msg', 'invalid value')}" if where else first.get("msg", "Invalid request")
    logger.warning("request_invalid", status_code=400, error=message, **_request_context(request))
    return _error_response(400, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("request_crashed", status_code=500, error=repr(exc), exc_info=exc, **_request_context(request))
    return _error_response(500, "Internal server error")


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Social Shop API", version="0.1.0")

    origins = [o.strip() for o in S.cors_allow_origins.split(",") if o.strip()] or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if S.metrics_enabled:
        app.middleware("http")(metrics_middleware)
        set_app_info(app.title, app.version)
        app.get("/metrics", include_in_schema=False)(metrics_endpoint)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(misc_router)
    app.include_router(addresses_router)
    app.include_router(orders_router)
    app.include_router(feelings_router)

    logger.info("app_created", title=app.title, version=app.version, metrics=S.metrics_enabled)
    return app


app = create_app()
