"""
Prometheus metrics collection for the activity planner

Instruments submission validation and store operations.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)


# Private registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

validations_total = Counter(
    name="activity_validations_total",
    documentation="Total number of submissions validated",
    labelnames=["record_type", "status"],  # status: valid, invalid
    registry=REGISTRY,
)

validation_failures_total = Counter(
    name="activity_validation_failures_total",
    documentation="Total number of individual validation rule failures",
    labelnames=["record_type", "rule_type", "field_name"],
    registry=REGISTRY,
)

# =======================
# STORE METRICS
# =======================

store_operations_total = Counter(
    name="activity_store_operations_total",
    documentation="Total number of store operations",
    labelnames=["operation", "status"],  # status: success, not_found, storage_failure
    registry=REGISTRY,
)

store_operation_duration_seconds = Histogram(
    name="activity_store_operation_duration_seconds",
    documentation="Time spent in store operations in seconds",
    labelnames=["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY,
)

events_stored = Gauge(
    name="activity_events_stored",
    documentation="Number of stored events per record type, as of the last full listing",
    labelnames=["record_type"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def get_metrics() -> bytes:
    """
    Get current metrics in Prometheus text format

    Returns:
        Metrics in Prometheus exposition format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


def increment_counter(counter: Counter, value: float = 1, **labels) -> None:
    counter.labels(**labels).inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    gauge.labels(**labels).set(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    histogram.labels(**labels).observe(value)


# =======================
# DOMAIN HELPERS
# =======================

def record_validation(record_type: str, is_valid: bool) -> None:
    """Record the outcome of one submission validation."""
    increment_counter(
        validations_total, 1, record_type=record_type, status="valid" if is_valid else "invalid"
    )


def record_validation_failure(record_type: str, rule_type: str, field_name: str) -> None:
    """
    Record a validation rule failure.

    Args:
        record_type: Event type being validated
        rule_type: Type of validation rule that failed
        field_name: Name of field that failed validation
    """
    increment_counter(
        validation_failures_total, 1, record_type=record_type, rule_type=rule_type, field_name=field_name
    )


def record_store_operation(operation: str, status: str, duration_seconds: float) -> None:
    """Record a completed store operation and its duration."""
    increment_counter(store_operations_total, 1, operation=operation, status=status)
    observe_histogram(store_operation_duration_seconds, duration_seconds, operation=operation)


def record_type_counts(counts: dict[str, int]) -> None:
    """Refresh the per-type stored events gauge."""
    for record_type, count in counts.items():
        set_gauge(events_stored, count, record_type=record_type)
