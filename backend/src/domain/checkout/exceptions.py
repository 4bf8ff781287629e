"""Exceptions raised by the checkout validation gate.

Business-rule failures are never raised; they are reported through
RuleEvaluation / ValidationOutcome. Only missing or malformed data that the
gate needs to make a decision is raised.
"""

from typing import Any, Optional


class CheckoutGateError(Exception):
    """Base exception for checkout gate errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.details = details or {}
        super().__init__(message)


class DataIntegrityError(CheckoutGateError):
    """Required data is missing or malformed.

    Raised for inventory responses lacking an expected store/product key and
    for scheduled-class payloads that cannot be parsed. Never treated as a pass.
    """


class InventoryLookupError(CheckoutGateError):
    """The external store inventory lookup failed (transport, timeout, HTTP status)."""
