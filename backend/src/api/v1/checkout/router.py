"""Checkout validation API router"""

import logging

from fastapi import APIRouter, Depends

from dependencies import get_validation_engine
from domain.checkout.engine import CheckoutValidationEngine
from observability.metrics import record_validation_outcome
from schemas.checkout import CheckoutValidationRequest, CheckoutValidationResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("/validate", response_model=CheckoutValidationResponse)
def validate_checkout(
    request: CheckoutValidationRequest,
    engine: CheckoutValidationEngine = Depends(get_validation_engine)
):
    """Decide whether a basket may proceed to checkout.

    Business-rule failures come back as status/reason with HTTP 200. Missing
    or malformed inventory and class data is answered with 422, an unreachable
    inventory service with 503 (see exception handlers in main).

    Args:
        request: Basket snapshot (may be null) and whether tax must be validated
        engine: Configured validation engine

    Returns:
        Status, optional reason, enable-checkout flag and store inventory matrix
    """
    basket = request.basket.to_domain() if request.basket else None

    outcome = engine.validate(basket, validate_tax=request.validate_tax)
    record_validation_outcome(outcome)

    return CheckoutValidationResponse.from_outcome(outcome, basket)
