import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from azure_blob import create_object_store
from config import get_settings
from database import check_connection, init_db
from firebase_auth import init_identity_verifier
from logging_config import configure_logging, request_id_ctx
from routers import ALL_ROUTERS
from utils.errors import AppError

logger = logging.getLogger(__name__)

settings = get_settings()


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    error = {"message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    if settings.auto_create_tables:
        init_db()
    logger.info("Rentals API started (env=%s)", settings.app_env)
    yield


def create_app(identity_verifier=None, object_store=None) -> FastAPI:
    """
    Build the app. Collaborators default to the ones configured from the
    environment; tests pass fakes.
    """
    app = FastAPI(title="Rentals API", version="1.0.0", lifespan=lifespan)

    app.state.identity_verifier = identity_verifier or init_identity_verifier(settings)
    app.state.object_store = object_store or create_object_store(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_ctx.set(rid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["X-Request-ID"] = rid
        logger.info(
            "%s %s -> %s", request.method, request.url.path, response.status_code,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        return response

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return _error(status.HTTP_400_BAD_REQUEST, "Validation error", details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return _error(exc.status_code, message)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity error: %s", exc.orig)
        return _error(status.HTTP_409_CONFLICT, "Resource conflicts with existing data")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.get("/health", tags=["health"])
    def health():
        database_ok = check_connection()
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": database_ok,
                "message": "Server is running" if database_ok else "Database unavailable",
                "database": "ok" if database_ok else "unavailable",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    for router in ALL_ROUTERS:
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=not settings.is_production)
