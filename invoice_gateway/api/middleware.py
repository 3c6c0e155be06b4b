"""FastAPI middleware for request tracing and metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from invoice_gateway.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"


def endpoint_template(request: Request) -> str:
    """
    Full request path with path parameters put back as placeholders.

    Keeps invoice references out of label values,
    e.g. /v1/invoices/INV-1 -> /v1/invoices/{reference}
    """
    params = {str(value): name for name, value in request.scope.get("path_params", {}).items()}
    segments = [
        "{" + params[segment] + "}" if segment in params else segment
        for segment in request.url.path.split("/")
    ]
    return "/".join(segments)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID, reusing the caller's one when supplied"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request latency per route template"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint_template(request),
            status=response.status_code,
        ).observe(time.perf_counter() - start_time)

        return response
