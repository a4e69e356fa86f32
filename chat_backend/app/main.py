import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .api.router import router as api_router
from .core.config import Settings
from .core.errors import InvalidArgumentError, NotFoundError, StorageError
from .core.logging_config import request_id_var, setup_logging
from .db import database

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Take X-Request-ID from the request (or generate one) for log correlation."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info("Not found %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(
            "Storage failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "internal storage error"})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.debug("Request validation failed: %s", errors)
        if any(err.get("loc", ())[:1] == ("path",) for err in errors):
            detail = "Invalid chat ID"
        else:
            detail = "Invalid JSON"
        return JSONResponse(status_code=400, content={"detail": detail})


def create_app(database_url: Optional[str] = None, init_schema: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Served by the CLI entrypoint, or with
    `uvicorn --factory chat_backend.app.main:create_app`.

    Args:
        database_url: SQLAlchemy URL, defaults to Settings.database_url()
        init_schema: create missing tables on startup
    """
    setup_logging(Settings.LOG_LEVEL, Settings.LOG_FILE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = database.configure(database_url)
        if init_schema:
            database.init_db(engine)
        logger.info("Chat backend started")
        yield
        engine.dispose()
        logger.info("Chat backend stopped")

    app = FastAPI(title="Chat Backend", version="1.0.0", lifespan=lifespan)

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "healthy"}

    app.include_router(api_router)
    return app
