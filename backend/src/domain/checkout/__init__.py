"""Checkout validation domain module.

This module implements the checkout gate: the rules that decide whether a
basket may proceed to checkout, the store inventory aggregation they rely on,
and the engine applying the fixed precedence between rule failures.
"""

from .models import (
    GateConfig,
    InventoryRecord,
    ReasonCode,
    RuleEvaluation,
    RuleFailure,
    ValidationOutcome,
    ValidationStatus
)
from .exceptions import CheckoutGateError, DataIntegrityError, InventoryLookupError
from .port import (
    BasketInventoryValidatorPort,
    InventoryEvaluatorPort,
    InventoryLookupPort,
    PromotionCatalogPort
)
from .inventory import BasketValidatorInventoryEvaluator, StoreInventoryEvaluator
from .engine import CheckoutValidationEngine

__all__ = [
    "GateConfig",
    "InventoryRecord",
    "ReasonCode",
    "RuleEvaluation",
    "RuleFailure",
    "ValidationOutcome",
    "ValidationStatus",
    "CheckoutGateError",
    "DataIntegrityError",
    "InventoryLookupError",
    "BasketInventoryValidatorPort",
    "InventoryEvaluatorPort",
    "InventoryLookupPort",
    "PromotionCatalogPort",
    "BasketValidatorInventoryEvaluator",
    "StoreInventoryEvaluator",
    "CheckoutValidationEngine",
]
