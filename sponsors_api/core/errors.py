"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class SponsorsError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class BadIndexError(SponsorsError):
    def __init__(self, index: str):
        super().__init__("Sponsor index must be a number", status_code=400)
        self.index = index


class SponsorNotFoundError(SponsorsError):
    def __init__(self, index: int):
        super().__init__("Not found", status_code=404)
        self.index = index


class UpstreamFetchError(SponsorsError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class RouteNotImplementedError(SponsorsError):
    def __init__(self, path: str):
        super().__init__("Not Found", status_code=501)
        self.path = path


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(SponsorsError)
    async def handle_sponsors_error(_request: Request, exc: SponsorsError):
        return PlainTextResponse(str(exc), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return PlainTextResponse("Internal server error", status_code=500)
