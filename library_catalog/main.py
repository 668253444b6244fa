"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: create missing tables before accepting requests
   - shutdown: log and exit

3. Middleware Stack (outermost first)
   - CORS: Allow cross-origin requests
   - Authorization gate: resolve the caller and enforce the page policy
     before any handler runs

4. Exception Handlers
   - Convert catalog errors (library_catalog.errors) to HTTP responses
   - Convert database errors to a generic 500
   - Log errors for debugging
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from library_catalog import __version__
from library_catalog.config import get_settings
from library_catalog.database import create_tables
from library_catalog.errors import (
    AlreadyReturned,
    ConcurrencyConflict,
    Forbidden,
    NotFound,
    PartialUpdateFailure,
    Unauthenticated,
    ValidationFailed,
)
from library_catalog.routers import (
    auth_router,
    authors_router,
    books_router,
    borrowings_router,
    categories_router,
    members_router,
    publishers_router,
)
from library_catalog.services.authorization import AuthorizationMiddleware

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Environment: {settings.environment}")

    create_tables()

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library Catalog

Catalog of books, authors, publishers and categories, with member borrowing.

### Pages
- **Books**: Search, sort, details; signed-in callers create and edit
- **Authors / Publishers / Categories**: Administrators only
- **Members**: Administrators only
- **Borrowings**: Signed-in callers borrow and return books

### Authentication
Register at `/auth/register`, then sign in at `/auth/login` and send the
token as `Authorization: Bearer <token>`.
        """,
        version=__version__,
        # Interactive docs are hidden in production
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------
    # The last middleware added runs first, so CORS wraps the gate and
    # preflight requests never reach it.
    app.add_middleware(AuthorizationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(
        request: Request,
        exc: ValidationFailed,
    ) -> JSONResponse:
        """Field rule violations: one message per offending field."""
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(ConcurrencyConflict)
    async def concurrency_conflict_handler(
        request: Request,
        exc: ConcurrencyConflict,
    ) -> JSONResponse:
        logger.warning(f"Concurrency conflict on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": exc.message},
        )

    @app.exception_handler(AlreadyReturned)
    async def already_returned_handler(
        request: Request,
        exc: AlreadyReturned,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": exc.message},
        )

    @app.exception_handler(PartialUpdateFailure)
    async def partial_update_handler(
        request: Request,
        exc: PartialUpdateFailure,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": exc.message},
        )

    @app.exception_handler(Unauthenticated)
    async def unauthenticated_handler(
        request: Request,
        exc: Unauthenticated,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": exc.message, "login_url": settings.login_url},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(Forbidden)
    async def forbidden_handler(request: Request, exc: Forbidden) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": exc.message},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)
    app.include_router(authors_router)
    app.include_router(publishers_router)
    app.include_router(categories_router)
    app.include_router(members_router)
    app.include_router(borrowings_router)
    app.include_router(auth_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the application is running and healthy.",
    )
    async def health_check() -> dict:
        """Used by load balancers and monitoring to check the instance."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "environment": settings.environment,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="Application root",
        description="Welcome message and application information.",
    )
    async def root() -> dict:
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "books": "/Books/Index",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn library_catalog.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m library_catalog.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "library_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,  # Auto-reload on code changes
    )
