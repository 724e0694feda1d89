"""Prometheus metrics for the editor backend.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Publish metrics
# ---------------------------------------------------------------------------

PUBLISH_REQUESTS = Counter(
    "qiita_editor_publish_requests_total",
    "Publish attempts by outcome",
    ["outcome"],  # success, invalid, misconfigured, upstream_error
)

QIITA_DURATION = Histogram(
    "qiita_editor_upstream_duration_seconds",
    "Duration of Qiita API calls in seconds",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# ---------------------------------------------------------------------------
# Draft store metrics
# ---------------------------------------------------------------------------

DRAFT_OPERATIONS = Counter(
    "qiita_editor_draft_operations_total",
    "Draft store operations",
    ["operation"],  # create, update, delete
)

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS = Counter(
    "qiita_editor_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "qiita_editor_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0, 30.0),
)
