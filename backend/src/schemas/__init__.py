"""Pydantic Schemas for the checkout gate API"""

from .checkout import (
    BasketSnapshot,
    CheckoutValidationRequest,
    CheckoutValidationResponse,
    InventoryRecordResponse,
)

__all__ = [
    "BasketSnapshot",
    "CheckoutValidationRequest",
    "CheckoutValidationResponse",
    "InventoryRecordResponse",
]
