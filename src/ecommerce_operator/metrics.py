"""Prometheus metrics for the ECommerce Application Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "ecommerce_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "ecommerce_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "ecommerce_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

resource_status_total = Counter(
    "ecommerce_operator_resource_status_total",
    "Resource status observations",
    ["kind", "status"],
)

# Derived resource writes
resource_writes_total = Counter(
    "ecommerce_operator_resource_writes_total",
    "Total number of derived resource writes",
    ["kind", "operation"],
)

credential_wait_total = Counter(
    "ecommerce_operator_credential_wait_total",
    "Total number of reconciliations waiting for a credential source",
    ["namespace"],
)

# Configuration drift detection metrics
drift_detected_total = Counter(
    "ecommerce_operator_drift_detected_total",
    "Total number of configuration drift detections",
    ["kind", "resource_type"],
)

# API call metrics
api_call_total = Counter(
    "ecommerce_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "ecommerce_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

rate_limit_hits_total = Counter(
    "ecommerce_operator_rate_limit_hits_total",
    "Total number of rate limit hits",
    ["api_type"],
)
