# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "rotation_requests_total",
    "Total HTTP requests to the presenter rotation service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "rotation_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "rotation_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
TEAMS_CREATED = Counter(
    "rotation_teams_created_total",
    "Total teams created",
)
ACTIVE_TEAMS = Gauge(
    "rotation_active_teams",
    "Number of teams currently stored",
)
MEMBERS_ADDED = Counter(
    "rotation_members_added_total",
    "Total members appended to a rotation",
)
MEMBERS_REMOVED = Counter(
    "rotation_members_removed_total",
    "Total members removed from a rotation",
)
ORDER_CHANGES = Counter(
    "rotation_order_changes_total",
    "Total presentation order mutations",
    ["operation"],
)
REJECTED_MUTATIONS = Counter(
    "rotation_rejected_mutations_total",
    "Mutations refused by an ordering invariant",
    ["reason"],
)
PRESENTER_LOOKUPS = Counter(
    "rotation_presenter_lookups_total",
    "Total presenter / schedule computations",
    ["kind"],
)
