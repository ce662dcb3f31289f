from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from framework.logging.logger import get_logger
from framework.response import ResponseModel
from typing import Any
from framework.config import settings

logger = get_logger("exception_handler")

class BusinessException(Exception):
    """Base class for business exceptions."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int = None, code: int = None, detail: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.code = code if code is not None else self.status_code
        self.detail = detail


class AuthError(BusinessException):
    """Identity could not be established (missing header, bad or expired token)."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthzError(BusinessException):
    """Identity established but its role is not allowed on the route."""
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(BusinessException):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(BusinessException):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BusinessException):
    status_code = status.HTTP_409_CONFLICT


class InternalError(BusinessException):
    """Primitive or precondition failure. The message sent to clients is always generic."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Internal server error"

    def __init__(self, detail: Any = None):
        super().__init__(self.public_message, detail=detail)


def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    trace_id = getattr(request.state, "trace_id", "unknown")

    if isinstance(exc, InternalError):
        logger.error(f"Trace[{trace_id}] - InternalError: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(code=exc.code, message=exc.message)
        )

    if isinstance(exc, BusinessException):
        logger.warning(f"Trace[{trace_id}] - {type(exc).__name__}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(code=exc.code, message=exc.message),
            headers=headers
        )

    if isinstance(exc, RequestValidationError):
        logger.error(f"Trace[{trace_id}] - RequestValidationError: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ResponseModel.fail(
                code=422,
                message="Invalid request parameters",
                data=jsonable_encoder(exc.errors())
            )
        )

    logger.opt(exception=True).error(f"Trace[{trace_id}] - UncaughtException: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseModel.fail(
            code=500,
            message="System busy, please try again later",
            data={"trace_id": trace_id} if settings.DEBUG else None
        )
    )
