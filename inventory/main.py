from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

from inventory.config import Settings, get_settings
from inventory.database import Database
from inventory.api import products, health

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    FastAPI's own request parsing failed before a route ran.

    A non-integer product ID can never match a row, so it is answered
    like any other unknown ID; anything else is a malformed body.
    """
    errors = exc.errors()
    if any(error["loc"] and error["loc"][0] == "path" for error in errors):
        return _error(status.HTTP_404_NOT_FOUND, products.NOT_FOUND_MESSAGE)
    if any(error.get("type") == "json_invalid" for error in errors):
        return _error(status.HTTP_400_BAD_REQUEST, "JSON inválido")
    return _error(status.HTTP_400_BAD_REQUEST, "Solicitud inválida")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error interno del servidor")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The database is opened in the lifespan handler, not here, so building
    the app never touches the disk.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting up application...")
        database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)

        logger.info("Creating database tables...")
        database.create_tables()
        logger.info("Database tables created successfully")

        app.state.database = database
        try:
            yield
        finally:
            # Shutdown
            logger.info("Shutting down application...")
            database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
        Inventory API for a single resource, products.

        - **POST /products**: create a product
        - **GET /products**: list products, newest first
        - **GET /products/{id}**: get one product
        - **PUT /products/{id}**: partially update a product
        - **DELETE /products/{id}**: delete a product

        Errors are returned as `{"error": "<message>"}`.
        """,
        version="1.0.0",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router)
    app.include_router(products.router)

    # Front-end files; mounted last so the API routes win
    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()
