"""Line item quantity limit rule"""

import logging
from typing import Optional

from ..basket import (
    PROMOTION_MIN_QUANTITY_KEY,
    SALES_CHANNEL_SCHEDULED,
    Basket,
    Product,
    ProductLineItem
)
from ..inventory import is_store_pickup
from ..models import GateConfig, RuleEvaluation, RuleFailure
from ..port import PromotionCatalogPort
from .class_rules import is_scheduled_class


logger = logging.getLogger(__name__)

RULE_NAME = "quantity_limits"


def compute_min_order_quantity(product: Optional[Product], promotions: PromotionCatalogPort) -> int:
    """Largest minimum quantity declared by the product's active promotions (at least 1).

    A promotion without a usable minimum quantity attribute is skipped.
    """
    minimum = 1
    if product is None:
        return minimum

    for promotion in promotions.active_promotions_for(product):
        try:
            declared = int(promotion.attributes[PROMOTION_MIN_QUANTITY_KEY])
        except (KeyError, TypeError, ValueError):
            logger.warning(
                f"Promotion '{promotion.id}' has no usable {PROMOTION_MIN_QUANTITY_KEY}; skipping"
            )
            continue
        minimum = max(minimum, declared)

    return minimum


def _is_blocked_channel(item: ProductLineItem, config: GateConfig) -> bool:
    # Scheduled-channel products other than classes are only sold for store pickup
    return (
        item.sales_channel == SALES_CHANNEL_SCHEDULED
        and not is_store_pickup(item.shipment, config)
        and not is_scheduled_class(item)
    )


def _exceeds_max(item: ProductLineItem, config: GateConfig) -> bool:
    max_quantity = item.product.max_order_quantity
    return (
        not config.ignore_max_quantity
        and max_quantity is not None
        and item.quantity > max_quantity
    )


def check_quantity_limits(
    basket: Basket,
    config: GateConfig,
    promotions: PromotionCatalogPort
) -> RuleEvaluation:
    """Apply promotion minimums to line items and validate requested quantities.

    Every line item gets its min_order_quantity updated first, then items are
    validated in order and the first failure is returned. Quantity outside the
    [min, max] range fails with QUANTITY_RANGE; a missing product or a
    scheduled-channel item shipped to an address fails without a reason.

    Args:
        basket: Basket under validation (min_order_quantity is written)
        config: Gate configuration (ignore max quantity, default shipping id)
        promotions: Promotion catalog used for minimum quantities

    Returns:
        RuleEvaluation for the first offending line item, or a pass
    """
    for item in basket.product_line_items:
        item.min_order_quantity = compute_min_order_quantity(item.product, promotions)

    for item in basket.product_line_items:
        if item.product is None:
            return RuleEvaluation.fail(RULE_NAME, product_id=item.product_id, cause="missing_product")

        if _is_blocked_channel(item, config):
            return RuleEvaluation.fail(RULE_NAME, product_id=item.product_id, cause="sales_channel")

        if _exceeds_max(item, config) or item.quantity < item.min_order_quantity:
            logger.debug(
                f"Basket {basket.id}: quantity {item.quantity} of '{item.product_id}' outside "
                f"[{item.min_order_quantity}, {item.product.max_order_quantity}]"
            )
            return RuleEvaluation.fail(
                RULE_NAME,
                reason=RuleFailure.QUANTITY_RANGE,
                product_id=item.product_id,
                quantity=item.quantity,
                min_quantity=item.min_order_quantity,
                max_quantity=item.product.max_order_quantity
            )

    return RuleEvaluation.ok(RULE_NAME)
