"""
@file: middleware.py
@description:
This module configures and centralizes middleware for the FastAPI application.

The middleware components include:
- CORS configuration: Controls which domains can access the API
- Request logging: Logs information about each request and its processing time

@dependencies:
- fastapi: For CORSMiddleware
- starlette: For BaseHTTPMiddleware
- app.core.config: For application settings
- app.core.logger: For structured logging

@notes:
- CORS is configured differently for development vs. production environments
- Middleware is applied in the main FastAPI application
"""

import time
from typing import Callable, List

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.logger import setup_logger, log_request_details

# Create a component-specific logger
logger = setup_logger("app.core.middleware")

PRODUCTION_ORIGINS: List[str] = [
    "https://pickresults.app",
    "https://www.pickresults.app",
]


def setup_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    In development mode, this allows all origins. In production, only the
    known frontend origins are allowed (plus localhost when DEBUG is on).

    Args:
        app: The FastAPI application instance
    """
    origins = ["*"]

    if settings.APP_ENV == "production":
        origins = list(PRODUCTION_ORIGINS)
        if settings.DEBUG:
            origins.extend([
                "http://localhost",
                "http://localhost:3000",
                "http://localhost:8000",
            ])

    logger.info(f"Setting up CORS middleware with origins: {origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
        max_age=86400,  # 24 hours cache for preflight requests
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging API requests and their processing time.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        log_request_details(logger, request, process_time, response.status_code)
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


def setup_request_logging(app: FastAPI) -> None:
    """
    Add request logging middleware to the FastAPI application.
    """
    logger.info("Setting up request logging middleware")
    app.add_middleware(RequestLoggingMiddleware)


def setup_all_middleware(app: FastAPI) -> None:
    """
    Configure and add all middleware to the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    # Setup CORS first (outermost middleware)
    setup_cors(app)
    setup_request_logging(app)
