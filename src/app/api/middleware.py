"""
HTTP middleware and error handlers applied in front of the API routes.

Provides request logging, security headers, rate limiting and the
translation of request validation failures into the 400 error shape.
"""
import time
from typing import Any, Callable

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from src.app.config import RateLimitSettings
from src.app.logging import get_logger
from src.client.schemas import ErrorResponse, FieldError, ValidationErrorResponse

logger = get_logger(__name__)

# Same defaults as Helmet, the usual hardening middleware for Express apps.
SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

# Swagger UI loads its assets from a CDN
CSP_EXEMPT_PATHS = ("/docs", "/redoc", "/openapi.json")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds hardening headers to every response and strips server identification."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        skip_csp = request.url.path.startswith(CSP_EXEMPT_PATHS)
        for header, value in SECURITY_HEADERS.items():
            if skip_csp and header == "Content-Security-Policy":
                continue
            response.headers.setdefault(header, value)

        if "server" in response.headers:
            del response.headers["server"]
        if "x-powered-by" in response.headers:
            del response.headers["x-powered-by"]
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and latency for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        logger.info(f"Started request {request.method} {request.url.path}")
        response = await call_next(request)
        duration = time.time() - start_time
        logger.info(
            f"Completed request {request.method} {request.url.path} "
            f"with status={response.status_code} in {duration:.3f}s"
        )
        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns exceptions escaping a route into the 500 JSON body.

    Installed innermost, so the response still passes through the security
    header and CORS middleware on its way out.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return await unhandled_exception_handler(request, e)


def create_limiter(settings: RateLimitSettings) -> Limiter:
    """
    Create the per-client-IP rate limiter.

    One limiter per application instance, so separate apps (and tests) do not
    share counters.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.limit],
        enabled=settings.enabled,
    )


def _encodable(value: Any) -> Any:
    """Echo a rejected input back in a form that always encodes as UTF-8 (lone surrogates are escaped)."""
    if isinstance(value, str):
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    if isinstance(value, dict):
        return {_encodable(key): _encodable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encodable(item) for item in value]
    return value


def to_field_errors(exc: RequestValidationError) -> list[FieldError]:
    """
    Convert pydantic validation errors on the request body into field errors.

    Paths use the JSON field names (firstName, zipCode, ...). Errors about the
    body as a whole (malformed JSON, not an object) have an empty path.
    """
    field_errors = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        field_loc = loc[1:] if loc and loc[0] == "body" else loc

        if error.get("type") == "json_invalid":
            field_loc = ()

        field_error = FieldError(
            path=".".join(str(part) for part in field_loc),
            msg=error.get("msg", "Invalid value"),
            location=location,
        )
        if field_loc and error.get("type") != "missing":
            field_error.value = _encodable(error.get("input"))
        field_errors.append(field_error)
    return field_errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with every field-level failure. No side effects have happened yet."""
    field_errors = to_field_errors(exc)
    logger.warning(
        "Rejected %s %s: invalid fields %s",
        request.method,
        request.url.path,
        [error.path for error in field_errors],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(ValidationErrorResponse(errors=field_errors), exclude_none=True),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so a single bad request never surfaces a stack trace."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error", code="INTERNAL_ERROR").model_dump(
            mode="json", by_alias=True, exclude_none=True
        ),
    )
