"""
Availability-model basket inventory validator

Implements BasketInventoryValidatorPort from each product's web availability
model: the basket is valid when every line item's quantity can be allocated
across in-stock, preorder and backorder levels.
"""

import logging

from domain.checkout.basket import Basket
from domain.checkout.port import BasketInventoryValidatorPort


logger = logging.getLogger(__name__)


class AvailabilityModelBasketValidator(BasketInventoryValidatorPort):

    def validate(self, basket: Basket) -> bool:
        requested: dict[str, int] = {}
        products = {}

        # Quantities of the same product across line items share one allocation
        for item in basket.product_line_items:
            if item.product is None:
                return False
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity
            products[item.product_id] = item.product

        for product_id, quantity in requested.items():
            levels = products[product_id].availability_model.get_availability_levels(quantity)
            if levels.not_available > 0:
                logger.debug(
                    f"Basket {basket.id}: {levels.not_available} of {quantity} '{product_id}' not available"
                )
                return False

        return True
