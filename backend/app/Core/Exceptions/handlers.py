from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from app.Core.Exceptions.errors import DomainError, StorageError
from app.Http.DTOs.error_schemas import APIError, APIErrorResponse


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = APIErrorResponse(error=APIError(code=code, message=message, details=details or {}))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.code} - {exc.message}")
    return _error_response(exc.status_code, exc.code, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Normalise FastAPI's own body/query validation into the same error shape
    return _error_response(
        422,
        "validation_error",
        "Request payload is invalid",
        {"errors": [{"loc": list(e.get("loc", [])), "msg": e.get("msg")} for e in exc.errors()]},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
