"""Basket content rule"""

from ..basket import Basket
from ..models import RuleEvaluation


RULE_NAME = "basket_content"


def check_basket_content(basket: Basket) -> RuleEvaluation:
    """Basket must hold at least one product or gift certificate line item.

    An empty basket does not make the outcome an error but always blocks checkout.
    """
    if basket.product_line_items or basket.gift_certificate_line_items:
        return RuleEvaluation.ok(RULE_NAME)
    return RuleEvaluation.fail(RULE_NAME, enable_checkout=False)
