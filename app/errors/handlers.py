from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR
from loguru import logger
from app.errors.exceptions import GenerationError

def _error_body(error: str, details=None) -> dict:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body

def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )

def generation_exception_handler(request: Request, exc: GenerationError):
    """
    Convert pipeline failures into JSON error bodies.

    Overload responses carry no details so clients only see the retry message.
    Everything else attaches whatever diagnostic payload the failure collected.
    """
    details = None if exc.status_code == 503 else jsonable_encoder(exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, details),
    )

def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content=_error_body("Invalid request payload", jsonable_encoder(exc.errors())),
    )

def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("An unexpected error occurred."),
    )
