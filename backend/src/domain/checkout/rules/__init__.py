"""Checkout rule implementations.

Each rule inspects the basket and returns a single RuleEvaluation. Rules never
raise for business failures; only malformed input data raises.
"""

from .address_rules import check_po_box_restrictions
from .class_rules import check_class_dates
from .content_rules import check_basket_content
from .coupon_rules import check_coupons
from .product_rules import check_product_existence
from .quantity_rules import check_quantity_limits
from .tax_rules import check_tax

__all__ = [
    "check_po_box_restrictions",
    "check_class_dates",
    "check_basket_content",
    "check_coupons",
    "check_product_existence",
    "check_quantity_limits",
    "check_tax",
]
