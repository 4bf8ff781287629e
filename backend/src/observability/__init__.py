"""Observability module for the checkout gate.

Provides structured logging, metrics and request correlation.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    checkout_validations_total,
    checkout_blocked_total,
    checkout_rule_failures_total,
    inventory_lookups_total,
    inventory_lookup_duration_seconds,
    record_validation_outcome,
)
from .request_id import request_id_var, get_request_id, set_request_id, generate_request_id

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "checkout_validations_total",
    "checkout_blocked_total",
    "checkout_rule_failures_total",
    "inventory_lookups_total",
    "inventory_lookup_duration_seconds",
    "record_validation_outcome",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
]
