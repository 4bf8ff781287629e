"""Product existence and web availability rule"""

import logging

from ..basket import Basket
from ..inventory import is_store_pickup
from ..models import GateConfig, RuleEvaluation


logger = logging.getLogger(__name__)

RULE_NAME = "product_existence"


def check_product_existence(basket: Basket, config: GateConfig) -> RuleEvaluation:
    """Check that every web-fulfilled line item has an online product.

    Store-pickup line items are left to the store inventory rule. For the rest,
    the web availability model must be able to allocate the full quantity;
    otherwise checkout is disabled (the rule itself still passes).

    Args:
        basket: Basket under validation
        config: Gate configuration (default shipping id)

    Returns:
        RuleEvaluation; enable_checkout is the AND of web availability across items
    """
    web_available = True

    for item in basket.product_line_items:
        if is_store_pickup(item.shipment, config):
            continue

        product = item.product
        if product is None or not product.online:
            logger.debug(f"Basket {basket.id}: product '{item.product_id}' missing or offline")
            return RuleEvaluation.fail(
                RULE_NAME,
                enable_checkout=web_available,
                product_id=item.product_id
            )

        levels = product.availability_model.get_availability_levels(item.quantity)
        web_available = web_available and levels.not_available == 0

    return RuleEvaluation.ok(RULE_NAME, enable_checkout=web_available)
