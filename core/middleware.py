# core/middleware.py
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logging import logger
from core.metrics import RequestMetrics


def resolve_route(scope: Scope) -> str:
    """Matched route template if routing found one, otherwise the raw path."""
    route = scope.get("route")
    path_template = getattr(route, "path", None)
    if path_template:
        return path_template
    return scope["path"]


class PrometheusMiddleware:
    """Record request count and duration once the response has finished.

    Metrics are written in a ``finally`` block, so every request is recorded
    exactly once whether the body was fully sent, the app raised, or the task
    was cancelled after a client disconnect.
    """

    def __init__(self, app: ASGIApp, metrics: RequestMetrics) -> None:
        self.app = app
        self.metrics = metrics

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        # Unstarted responses are answered with 500 by the outer error middleware
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration = time.perf_counter() - start
            method = scope["method"]
            route = resolve_route(scope)
            self.metrics.observe_request(method, route, status_code, duration)
            logger.log_request(method, scope["path"], route, status_code, duration)
