# app/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import (
    AlreadyCheckedOut,
    BackendUnavailable,
    InvalidArgument,
    NotFound,
    PersistenceError,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

#fallback dla bledow ktorych router nie zlapal sam
_STATUS_CODES = {
    NotFound: 404,
    InvalidArgument: 400,
    AlreadyCheckedOut: 400,
    BackendUnavailable: 503,
    PersistenceError: 500,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, status_code in _STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler(status_code))


def _handler(status_code: int):
    async def handle(request: Request, exc: Exception):
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {status_code}: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handle
