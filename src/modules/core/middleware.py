"""Request-scoped middleware: correlation ids and the API-gateway check."""

import time
import uuid
from typing import Callable

import structlog
from django.conf import settings
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger(__name__)


def _meta_key(header: str) -> str:
    return "HTTP_" + header.upper().replace("-", "_")


class CorrelationIdMiddleware:
    """Tag every log line of a request with one correlation id.

    The id is taken from the ``CORRELATION_ID_HEADER`` request header
    (``X-Request-ID`` by default) or minted as a UUID4, bound into
    structlog's contextvars for the rest of the request and echoed back on
    the response.  One ``request_finished`` line per request records the
    status and elapsed time.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        header = getattr(settings, "CORRELATION_ID_HEADER", "X-Request-ID")
        cid = request.META.get(_meta_key(header)) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid, method=request.method, path=request.path
        )
        started = time.monotonic()

        response = self.get_response(request)

        logger.info(
            "request_finished",
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
        )
        response[header] = cid
        return response


class ApiGatewayOnlyMiddleware:
    """Reject requests that did not come through the API gateway.

    The gateway stamps every forwarded request with a header (``Api-Gateway``
    by default).  When ``API_GATEWAY_REQUIRED`` is on, any request without
    it receives 503.  Paths listed in ``API_GATEWAY_EXEMPT_PATHS`` (health
    probes) are always let through.
    """

    unavailable_message = "Sorry, service is unavailable"

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response
        self.meta_key = _meta_key(
            getattr(settings, "API_GATEWAY_HEADER", "Api-Gateway")
        )

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not getattr(settings, "API_GATEWAY_REQUIRED", False):
            return self.get_response(request)

        exempt = getattr(settings, "API_GATEWAY_EXEMPT_PATHS", ())
        if request.path in exempt:
            return self.get_response(request)

        if not request.META.get(self.meta_key):
            logger.warning(
                "gateway_header_missing",
                method=request.method,
                path=request.get_full_path(),
            )
            return HttpResponse(
                self.unavailable_message,
                status=503,
                content_type="text/plain",
            )

        return self.get_response(request)
