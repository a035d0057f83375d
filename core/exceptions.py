# core/exceptions.py
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, timezone
from typing import Dict, Any
import traceback

from core.logging import logger


class ServiceException(Exception):
    """Base exception for the status service"""

    def __init__(
        self,
        detail: str,
        status_code: int = 500,
        error_code: str = "SERVICE_ERROR",
        metadata: Dict[str, Any] = None
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        self.metadata = metadata or {}
        super().__init__(detail)


class MetricsExportError(ServiceException):
    """Serializing the metrics registry failed"""

    def __init__(self, detail: str, error_type: str = None):
        super().__init__(
            detail=detail,
            status_code=500,
            error_code="METRICS_EXPORT_ERROR",
            metadata={"error_type": error_type} if error_type else None
        )


def _debug_enabled(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.debug)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_error_response(
    error: ServiceException,
    include_debug: bool = False
) -> Dict[str, Any]:
    """Create standardized error response"""

    response = {
        "success": False,
        "error": {
            "code": error.error_code,
            "message": error.detail,
            "timestamp": _timestamp()
        }
    }

    if error.metadata:
        response["error"]["metadata"] = error.metadata

    if include_debug:
        response["error"]["debug"] = {
            "exception_type": type(error.__cause__ or error).__name__,
            "traceback": "".join(traceback.format_exception(error)),
        }

    return response


async def handle_service_exception(request: Request, exc: ServiceException) -> JSONResponse:
    """Handle service exceptions"""

    logger.error(
        "Service exception occurred",
        error_code=exc.error_code,
        detail=exc.detail,
        status_code=exc.status_code,
        path=request.url.path,
        metadata=exc.metadata
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc, include_debug=_debug_enabled(request))
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework HTTP exceptions (404, 405, ...)"""

    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path
    )

    response_data = {
        "success": False,
        "error": {
            "code": "HTTP_ERROR",
            "message": exc.detail,
            "timestamp": _timestamp()
        }
    }

    return JSONResponse(
        status_code=exc.status_code,
        content=response_data,
        headers=getattr(exc, "headers", None)
    )


async def handle_general_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""

    debug = _debug_enabled(request)

    logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        traceback="".join(traceback.format_exception(exc)) if debug else None
    )

    # Don't expose internal errors outside debug
    detail = str(exc) if debug else "Internal server error"

    response_data = {
        "success": False,
        "error": {
            "code": "INTERNAL_ERROR",
            "message": detail,
            "timestamp": _timestamp()
        }
    }

    if debug:
        response_data["error"]["debug"] = {
            "exception_type": type(exc).__name__,
            "traceback": "".join(traceback.format_exception(exc))
        }

    return JSONResponse(
        status_code=500,
        content=response_data
    )
