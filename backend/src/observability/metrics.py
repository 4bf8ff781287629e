"""Prometheus metrics for the checkout gate.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

# Validation outcome metrics
checkout_validations_total = Counter(
    "checkout_gate_validations_total",
    "Total checkout validation runs",
    ["status", "reason"]  # reason: reason code or "none"
)

checkout_blocked_total = Counter(
    "checkout_gate_blocked_total",
    "Validation runs that disabled checkout"
)

checkout_rule_failures_total = Counter(
    "checkout_gate_rule_failures_total",
    "Failed checkout rules",
    ["rule_name"]
)

# Store inventory lookup metrics
inventory_lookups_total = Counter(
    "checkout_gate_inventory_lookups_total",
    "Store inventory lookups issued",
    ["result"]  # result: success|error|timeout
)

inventory_lookup_duration_seconds = Histogram(
    "checkout_gate_inventory_lookup_duration_seconds",
    "Store inventory lookup latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)


def record_validation_outcome(outcome) -> None:
    """Count a ValidationOutcome and its failed rules."""
    checkout_validations_total.labels(
        status=outcome.status.value,
        reason=outcome.reason.value if outcome.reason else "none"
    ).inc()
    if not outcome.enable_checkout:
        checkout_blocked_total.inc()
    for rule_name in outcome.failed_rules:
        checkout_rule_failures_total.labels(rule_name=rule_name).inc()
