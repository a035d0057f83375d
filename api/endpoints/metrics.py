# api/endpoints/metrics.py
from fastapi import APIRouter, Request, Response

from core.exceptions import MetricsExportError
from core.metrics import RequestMetrics

router = APIRouter(tags=["metrics"])


def get_request_metrics(request: Request) -> RequestMetrics:
    return request.app.state.metrics


@router.api_route("/metrics", methods=["GET", "HEAD"], summary="Prometheus exposition")
async def metrics(request: Request):
    request_metrics = get_request_metrics(request)
    try:
        payload = request_metrics.render()
    except Exception as e:
        raise MetricsExportError(str(e), error_type=type(e).__name__) from e
    return Response(content=payload, media_type=request_metrics.content_type)
