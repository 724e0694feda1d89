"""FastAPI application for the Qiita markdown editor backend.

Endpoints:
  POST   /api/articles       — Publish an article to Qiita
  POST   /api/drafts         — Save a new draft
  GET    /api/drafts         — Most recently modified draft (or null)
  GET    /api/drafts/list    — All drafts, newest first
  GET    /api/drafts/{id}    — A single draft
  PUT    /api/drafts/{id}    — Update a draft
  DELETE /api/drafts/{id}    — Delete a draft
  GET    /api/health         — Liveness check
  GET    /metrics            — Prometheus metrics
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

from backend.config import settings
from backend.dependencies import get_qiita_client, get_storage
from backend.errors import register_error_handlers
from backend.metrics import HTTP_DURATION, HTTP_REQUESTS
from backend.routes import articles_router, drafts_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)

# Endpoints excluded from HTTP metrics
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Route template keeps draft ids out of the label set
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=endpoint).observe(elapsed)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: report where drafts live and whether publishing is possible."""
    storage = get_storage()
    logger.info(
        "Drafts directory: %s (%d drafts)", storage.directory.resolve(), storage.count
    )
    if not get_qiita_client().configured:
        logger.warning("QIITA_ACCESS_TOKEN is not set — publishing will fail")
    yield
    logger.info("Editor backend shut down.")


app = FastAPI(title="Qiita Markdown Editor", version="1.0.0", lifespan=lifespan)

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(articles_router)
app.include_router(drafts_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
