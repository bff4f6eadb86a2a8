# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "worship_requests_total",
    "Total HTTP requests to the worship service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "worship_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "worship_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)
RATE_LIMITED = Counter(
    "worship_rate_limited_total",
    "Requests rejected by rate limiting",
)

# ── Business Metrics (updated by service layer; live gauges zeroed on store reset) ──
RECORDS_CREATED = Counter(
    "worship_records_created_total",
    "Total records created",
    ["kind"],
)
RECORDS_UPDATED = Counter(
    "worship_records_updated_total",
    "Total records updated",
    ["kind"],
)
RECORDS_DELETED = Counter(
    "worship_records_deleted_total",
    "Total records deleted",
    ["kind"],
)
WRITES_REJECTED = Counter(
    "worship_writes_rejected_total",
    "Writes refused by integrity checks",
    ["kind", "reason"],
)
LIVE_RECORDS = Gauge(
    "worship_live_records",
    "Number of records currently held in the store",
    ["kind"],
)
LOGIN_ATTEMPTS = Counter(
    "worship_login_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
)
