"""DRF exception handler with gateway-friendly error bodies.

Errors raised by DRF itself (authentication, permission, throttling,
malformed payloads) keep their status code but are answered with a
``{"title", "status", "detail"}`` body.  Catalog outcomes never pass
through here: the product views build their own responses.
"""

from __future__ import annotations

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

_FRIENDLY = {
    status.HTTP_401_UNAUTHORIZED: ("Alert", "You are not authorized to access."),
    status.HTTP_403_FORBIDDEN: (
        "Out of Access",
        "You are not allowed/required to access.",
    ),
    status.HTTP_429_TOO_MANY_REQUESTS: ("Warning", "Too many requests made."),
}


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled: let Django's 500 machinery log and answer it.
        return None

    view = context.get("view")
    logger.warning(
        "api_error",
        status_code=response.status_code,
        error_type=type(exc).__name__,
        view=type(view).__name__ if view is not None else None,
    )

    if response.status_code in _FRIENDLY:
        title, detail = _FRIENDLY[response.status_code]
    else:
        title, detail = "Error", response.data

    body = {"title": title, "status": response.status_code, "detail": detail}
    return Response(body, status=response.status_code, headers=_carry_headers(response))


def _carry_headers(response: Response) -> dict:
    headers = {}
    for name in ("WWW-Authenticate", "Retry-After"):
        if response.has_header(name):
            headers[name] = response[name]
    return headers
