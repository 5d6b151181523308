import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from xferlogic.common.exception.errors import XferLogicError

logger = logging.getLogger(__name__)


def register_exception(app: FastAPI) -> None:
    """Install the boundary handlers that turn every failure into ``{"error": ...}``."""

    @app.exception_handler(XferLogicError)
    async def xferlogic_exception_handler(request: Request, exc: XferLogicError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: [{exc.code}] {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={'error': exc.detail},
            headers=getattr(exc, 'headers', None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {'loc': list(error.get('loc', ())), 'msg': error.get('msg', '')}
            for error in exc.errors()
        ]
        return JSONResponse(status_code=422, content={'error': 'Invalid request body', 'details': errors})

    @app.exception_handler(Exception)
    async def all_unknown_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={'error': 'Internal server error'})
