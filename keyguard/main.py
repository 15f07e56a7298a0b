#!/usr/bin/env python3
"""
KeyGuard - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Routes requests to the key server handlers

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from keyguard import __version__
from keyguard.config.provider import Configuration, ConfigProvider, EnvConfigProvider
from keyguard.modules.auth import AuthFactory, Authenticator
from keyguard.modules.keys import KeyFileError
from keyguard.modules.server import KeyServer

logger = logging.getLogger(__name__)

KEY_ROUTE_METHODS = ["GET", "HEAD", "POST"]


def create_app(config: Configuration, authenticator: Authenticator) -> FastAPI:
    """
    Create the KeyGuard application.

    Args:
        config: Immutable configuration naming the served files
        authenticator: Credential verification capability for /key

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle.
        """
        logger.info("Starting KeyGuard API...")
        logger.info(f"Serving loader script from {config.loader_script}")
        logger.info(f"Serving SSH key pair from {config.ssh_key} / {config.public_key}")

        yield

        logger.info("KeyGuard API shutdown complete")

    app = FastAPI(
        title="KeyGuard API",
        description="KeyGuard - Authenticated SSH key distribution",
        version=__version__,
        lifespan=lifespan,
    )

    server = KeyServer(config, authenticator)
    app.state.key_server = server

    # Key distribution endpoints (method is not validated)
    app.add_api_route("/", server.loader_handler, methods=KEY_ROUTE_METHODS, include_in_schema=False)
    app.add_api_route("/pubkey", server.public_key_handler, methods=KEY_ROUTE_METHODS)
    app.add_api_route("/key", server.key_handler, methods=KEY_ROUTE_METHODS)

    @app.get("/healthz")
    async def healthz():
        """
        Minimal health check endpoint for readiness/liveness probes.

        Returns:
            200: Service is running
        """
        return {"status": "ok"}

    @app.exception_handler(KeyFileError)
    async def key_file_error_handler(request: Request, exc: KeyFileError):
        """Handle unreadable served files without exposing paths."""
        logger.error(f"Failed to serve {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Resource unavailable"})

    return app


def create_app_from_provider(config_provider: ConfigProvider) -> FastAPI:
    """Build configuration and authenticator from a provider and create the app."""
    config = config_provider.get_key_config()
    authenticator = AuthFactory.build(config_provider)
    return create_app(config, authenticator)


def create_app_from_env() -> FastAPI:
    """
    Application factory for ASGI servers.

    Usage: uvicorn keyguard.main:create_app_from_env --factory
    """
    return create_app_from_provider(EnvConfigProvider())
