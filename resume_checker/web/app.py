"""FastAPI app entrypoint for the Resume Checker API."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from ..config import AppConfig, load_config
from ..service import ResumeChecker
from .errors import APIError, api_error_handler, validation_error_handler
from .routes import router

logger = logging.getLogger("resume_checker.web.api")


def create_app(
    config: Optional[AppConfig] = None,
    checker: Optional[ResumeChecker] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Configuration is validated here, so a missing model credential fails app
    construction with ``ConfigurationError`` instead of surfacing per request.
    """
    config = config or load_config()
    checker = checker or ResumeChecker.from_config(config)

    app = FastAPI(title="Resume Checker API", version="0.1.0")
    app.state.config = config
    app.state.checker = checker
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(router)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = (perf_counter() - start) * 1000
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f provider=%s model=%s",
                request.method,
                request.url.path,
                status,
                duration_ms,
                config.provider,
                checker.client.model,
            )

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {"status": "ok"}

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app
