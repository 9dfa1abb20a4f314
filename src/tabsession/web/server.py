from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from tabsession.app import App
from tabsession.config import Config
from tabsession.errors import UserError
from tabsession.web.error_handlers import general_exception_handler, user_error_handler
from tabsession.web.openapi import set_custom_openapi
from tabsession.web.routers import sessions_router, user_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="TabSession API",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    # Store app instance and config in app state
    app.state.app = app_instance
    app.state.config = config

    # Add CORS middleware for frontend development
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Give every request an ID for error bodies and log lines."""
        request_id = uuid4()
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=str(request_id))
        return await call_next(request)

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    # API v1 routes
    app.include_router(user_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
