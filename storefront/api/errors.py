# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.errors import InternalError, StorefrontError, ValidationError, field_details
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationError("Invalid request", details=field_details(exc.errors()))
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} crashed")
    err = InternalError("Internal server error")
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, _storefront_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unhandled_error)
