# main.py
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn

from core.config import Settings, get_settings
from core.exceptions import ServiceException, handle_service_exception, handle_http_exception, handle_general_exception
from core.logging import logger, configure_logging
from core.metrics import RequestMetrics
from core.middleware import PrometheusMiddleware
from core.runtime import hostname, utc_timestamp
from core.server import ExitOnSignalServer

from api.endpoints import health, metrics


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    base_url = f"http://localhost:{settings.port}"
    logger.info(
        f"{settings.service_name} status service starting up",
        environment=settings.environment,
        host=settings.host,
        port=settings.port,
        metrics_url=f"{base_url}/metrics",
        health_url=f"{base_url}/health",
    )
    yield
    logger.info("Status service stopped")


def create_app(settings: Optional[Settings] = None, request_metrics: Optional[RequestMetrics] = None) -> FastAPI:
    settings = settings or get_settings()
    request_metrics = request_metrics or RequestMetrics()

    app = FastAPI(
        title=f"{settings.service_name} Status API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.metrics = request_metrics

    # Instrumentation middleware
    app.add_middleware(PrometheusMiddleware, metrics=request_metrics)

    # Routers
    app.include_router(health.router)
    app.include_router(metrics.router)

    # Error handlers
    app.add_exception_handler(ServiceException, handle_service_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_general_exception)

    @app.api_route("/", methods=["GET", "HEAD"], tags=["root"])
    async def root(request: Request):
        settings = request.app.state.settings
        return {
            "message": f"Hello World from {settings.service_name} {settings.environment.upper()}! 🚀",
            "timestamp": utc_timestamp(),
            "version": settings.app_version,
            "environment": settings.environment,
            "hostname": hostname(),
            "branch": settings.branch,
        }

    return app


configure_logging()
app = create_app()


def run():
    settings = get_settings()
    config = uvicorn.Config(app, access_log=False, **settings.get_server_config())
    ExitOnSignalServer(config).run()


if __name__ == "__main__":
    run()
