"""
Domain exceptions and their HTTP translation.

Every error body has the shape {"error": str} plus optional
"details" / "tip" / "required" / "missing" keys.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class StoreError(Exception):
    """A store call failed. `message` is safe to return to clients."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def root_cause(self) -> Optional[BaseException]:
        cause = self.__cause__
        while isinstance(cause, StoreError) and cause.__cause__ is not None:
            cause = cause.__cause__
        return cause


class NotFoundError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(Exception):
    """Entity payload is missing required fields."""

    def __init__(self, required: list[str], missing: list[str]):
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.required = required
        self.missing = missing


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    log.warning(f"[API] {request.method} {request.url.path} -> 500 {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.message},
    )


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.message})


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    log.info(f"[API] {request.method} {request.url.path} rejected, missing {exc.missing}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Missing required fields",
            "required": exc.required,
            "missing": exc.missing,
        },
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed JSON or a body that is not an object; field-level checks live in app.services.validation
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    log.info(f"[API] {request.method} {request.url.path} rejected: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
