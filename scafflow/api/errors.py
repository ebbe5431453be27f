"""RFC 7807 Problem Details error response formatting"""

import logging
from typing import Optional, Dict, Any, List
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from scafflow.exceptions import (
    ScafflowError,
    Unauthenticated,
    Forbidden,
    NotFound,
    InvalidInput,
    Conflict,
    IntegrityViolation,
)

logger = logging.getLogger(__name__)


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific field"""
    field: str
    message: str


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs"""
    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference identifying the specific occurrence")
    errors: Optional[List[ValidationErrorDetail]] = Field(None, description="Validation errors")


def create_error_response(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """
    Create an RFC 7807 compliant error response

    Args:
        status_code: HTTP status code
        title: Short error title
        detail: Detailed error message
        error_type: Error type URI (defaults to generic type based on status code)
        instance: Request path or identifier
        errors: List of validation errors with field and message
        headers: Extra response headers

    Returns:
        JSONResponse with problem details
    """
    # Default error types based on status code
    error_type_map = {
        400: "validation_error",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        409: "conflict",
        429: "rate_limit_exceeded",
        500: "internal_server_error",
    }

    if not error_type:
        error_type = error_type_map.get(status_code, "error")

    problem = {
        "type": f"https://api.scafflow.app/errors/{error_type}",
        "title": title,
        "status": status_code,
        "detail": detail
    }

    if instance:
        problem["instance"] = instance

    if errors:
        problem["errors"] = errors

    return JSONResponse(
        status_code=status_code,
        content=problem,
        headers=headers
    )


def too_many_requests_error(detail: str, instance: Optional[str] = None) -> JSONResponse:
    """Create a 429 Too Many Requests error response"""
    return create_error_response(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        title="Too Many Requests",
        detail=detail,
        instance=instance
    )


# Domain exception -> (status code, title)
_STATUS_MAP = {
    Unauthenticated: (status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    Forbidden: (status.HTTP_403_FORBIDDEN, "Forbidden"),
    NotFound: (status.HTTP_404_NOT_FOUND, "Not Found"),
    InvalidInput: (status.HTTP_400_BAD_REQUEST, "Validation Error"),
    Conflict: (status.HTTP_409_CONFLICT, "Conflict"),
    IntegrityViolation: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


async def scafflow_error_handler(request: Request, exc: ScafflowError) -> JSONResponse:
    """Render a domain exception as problem details"""
    status_code, title = _STATUS_MAP.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
    )

    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.detail}")
        detail = "An internal server error occurred"
    else:
        detail = exc.detail

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None

    return create_error_response(
        status_code=status_code,
        title=title,
        detail=detail,
        instance=request.url.path,
        errors=getattr(exc, "errors", None),
        headers=headers
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI request validation failures as 400 problem details"""
    errors: List[Dict[str, Any]] = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body") or "body",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail="Request validation failed",
        instance=request.url.path,
        errors=errors
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the problem-details handlers to an application"""
    app.add_exception_handler(ScafflowError, scafflow_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


# OpenAPI documentation for the problem-details responses shared by all routers
PROBLEM_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ProblemDetail, "description": "Validation Error"},
    401: {"model": ProblemDetail, "description": "Unauthorized"},
    403: {"model": ProblemDetail, "description": "Forbidden"},
    404: {"model": ProblemDetail, "description": "Not Found"},
}
