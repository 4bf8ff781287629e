"""Coupon validity rule"""

from ..basket import Basket
from ..models import RuleEvaluation


RULE_NAME = "coupon_validity"


def check_coupons(basket: Basket) -> RuleEvaluation:
    """Every coupon line item must be flagged valid by the promotion engine."""
    invalid = [coupon.code for coupon in basket.coupon_line_items if not coupon.valid]
    if invalid:
        return RuleEvaluation.fail(RULE_NAME, invalid_coupons=invalid)
    return RuleEvaluation.ok(RULE_NAME)
