"""
Exception Handlers
Global exception handling for FastAPI
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from sealed_otp.exceptions.custom_exceptions import OTPGateException, VerificationException

logger = logging.getLogger(__name__)


async def otp_gate_exception_handler(request: Request, exc: OTPGateException):
    """
    Handle all application exceptions

    Verification failures answer with the {valid, message} shape the
    front end expects; everything else answers with {ok, message}.
    """
    logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")

    if isinstance(exc, VerificationException):
        content = {"valid": False, "message": exc.message}
    else:
        content = {"ok": False, "message": exc.message}

    return JSONResponse(
        status_code=exc.status_code,
        content=content
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle malformed request bodies
    """
    errors = []
    for error in exc.errors():
        errors.append(f"{' -> '.join(str(x) for x in error['loc'])}: {error['msg']}")

    logger.warning(f"ValidationError on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "ok": False,
            "message": "Invalid request body. " + "; ".join(errors)
        }
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Handle all other exceptions
    """
    logger.exception(f"Unhandled exception: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "ok": False,
            "message": "Internal server error"
        }
    )
