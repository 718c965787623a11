"""Global exception handlers that map domain exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from cosmetics_store.errors import (
    EMPTY_FIELD,
    NEGATIVE_VALUE,
    NOT_FOUND,
    QUANTITY_EXCEEDED,
    STORAGE_ERROR,
    EmptyFieldError,
    NegativeValueError,
    NotFoundError,
    QuantityExceededError,
    StorageError,
)
from cosmetics_store.schemas.error import ErrorResponse


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def empty_field_error_handler(_request: Request, exc: EmptyFieldError) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        EMPTY_FIELD,
    )


def negative_value_error_handler(
    _request: Request, exc: NegativeValueError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        NEGATIVE_VALUE,
    )


def quantity_exceeded_error_handler(
    _request: Request, exc: QuantityExceededError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        QUANTITY_EXCEEDED,
    )


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        str(exc),
        STORAGE_ERROR,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(EmptyFieldError, empty_field_error_handler)
    app.add_exception_handler(NegativeValueError, negative_value_error_handler)
    app.add_exception_handler(QuantityExceededError, quantity_exceeded_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
