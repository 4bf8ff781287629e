"""PO box / restricted product rule"""

import logging
import re
from typing import Optional

from ..basket import (
    PRODUCT_TYPE_PRODUCT,
    SOURCE_CHANNEL_DROP_SHIP,
    Basket,
    ProductLineItem
)
from ..models import RuleEvaluation


logger = logging.getLogger(__name__)

RULE_NAME = "pobox_restriction"

# Any "P.O." prefix: "PO Box 1", "P.O. Drawer 8", "Post Office Box 1", "POB 1", "PO1".
# The prefix must end at a word boundary so "Portland" or "Pobeda" do not match.
PO_BOX_PATTERN = re.compile(
    r"^\s*p(?:ost)?[\s.\-]*o(?:ffice)?(?:\b|box\b|b(?=[\s\d.]|$)|(?=\d))",
    re.IGNORECASE
)


def is_po_box(address_line: Optional[str]) -> bool:
    if not address_line:
        return False
    return PO_BOX_PATTERN.match(address_line) is not None


def is_restricted_for_po_box(item: ProductLineItem) -> bool:
    """Hazardous or drop-shipped plain products cannot ship to a PO box."""
    if item.product_type != PRODUCT_TYPE_PRODUCT:
        return False
    return item.hazardous or item.source_channel == SOURCE_CHANNEL_DROP_SHIP


def check_po_box_restrictions(basket: Basket) -> RuleEvaluation:
    """Block hazardous or drop-ship products when the default address is a PO box.

    The default shipment's address decides; line items of every shipment are
    checked. A basket without shipments, default address or first address line
    passes.
    """
    shipment = basket.default_shipment
    if shipment is None or shipment.shipping_address is None:
        return RuleEvaluation.ok(RULE_NAME)

    if not is_po_box(shipment.shipping_address.address1):
        return RuleEvaluation.ok(RULE_NAME)

    for item in basket.product_line_items:
        if is_restricted_for_po_box(item):
            logger.debug(f"Basket {basket.id}: '{item.product_id}' cannot ship to a PO box")
            return RuleEvaluation.fail(RULE_NAME, enable_checkout=False, product_id=item.product_id)

    return RuleEvaluation.ok(RULE_NAME)
