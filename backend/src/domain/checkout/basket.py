"""Basket object model consumed by the checkout gate.

These are plain in-memory representations of the commerce platform's cart
objects (basket, shipments, line items, products). The gate only reads them,
except for ProductLineItem.min_order_quantity which the quantity rule writes.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


# Line item / product classification values
PRODUCT_TYPE_CLASS = "Class"
PRODUCT_TYPE_PRODUCT = "Product"
SALES_CHANNEL_SCHEDULED = "S"
SOURCE_CHANNEL_DROP_SHIP = "drop-ship"

# Key of the class start date inside ProductLineItem.class_payload
CLASS_DATE_KEY = "classDate"

# Promotion custom attribute holding the minimum purchasable quantity
PROMOTION_MIN_QUANTITY_KEY = "minQuantity"


class PriceState(str, Enum):
    """Computation state of a basket total."""
    AVAILABLE = "AVAILABLE"
    NOT_COMPUTED = "NOT_COMPUTED"
    ERROR = "ERROR"


@dataclass
class PriceValue:
    amount: Optional[Decimal] = Decimal("0.00")
    state: PriceState = PriceState.AVAILABLE

    @property
    def available(self) -> bool:
        return self.state == PriceState.AVAILABLE and self.amount is not None

    @classmethod
    def unavailable(cls, state: PriceState = PriceState.NOT_COMPUTED) -> "PriceValue":
        return cls(amount=None, state=state)


@dataclass
class AvailabilityLevels:
    """Split of a requested quantity across availability levels."""
    in_stock: int = 0
    preorder: int = 0
    backorder: int = 0
    not_available: int = 0


@dataclass
class AvailabilityModel:
    """Web (online) inventory of a product.

    ats is the available-to-sell quantity; backorder and preorder allocations
    absorb demand that exceeds it. A perpetual record is always in stock.
    """
    ats: int = 0
    perpetual: bool = False
    backorder_allocation: int = 0
    preorder_allocation: int = 0

    def get_availability_levels(self, quantity: int) -> AvailabilityLevels:
        if self.perpetual:
            return AvailabilityLevels(in_stock=quantity)

        remaining = quantity
        in_stock = min(remaining, max(self.ats, 0))
        remaining -= in_stock
        preorder = min(remaining, max(self.preorder_allocation, 0))
        remaining -= preorder
        backorder = min(remaining, max(self.backorder_allocation, 0))
        remaining -= backorder

        return AvailabilityLevels(
            in_stock=in_stock,
            preorder=preorder,
            backorder=backorder,
            not_available=remaining,
        )


@dataclass
class Promotion:
    """Active promotion; attributes holds its custom attributes."""
    id: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class Product:
    id: str
    online: bool = True
    availability_model: AvailabilityModel = field(default_factory=AvailabilityModel)
    max_order_quantity: Optional[int] = None
    promotions: list[Promotion] = field(default_factory=list)


@dataclass
class Address:
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(eq=False)
class Shipment:
    """A basket shipment.

    store_id is empty (or the configured default shipping id) for ship-to-address
    shipments and names the pickup store otherwise.
    """
    id: str
    store_id: Optional[str] = None
    shipping_address: Optional[Address] = None
    is_default: bool = False


@dataclass(eq=False)
class ProductLineItem:
    product_id: str
    product: Optional[Product] = None
    quantity: int = 1
    shipment: Optional[Shipment] = None
    product_type: Optional[str] = PRODUCT_TYPE_PRODUCT
    sales_channel: Optional[str] = None
    hazardous: bool = False
    source_channel: Optional[str] = None
    class_payload: Optional[str] = None
    min_order_quantity: int = 1


@dataclass
class CouponLineItem:
    code: str
    valid: bool = True


@dataclass
class GiftCertificateLineItem:
    id: str
    amount: Decimal = Decimal("0")


@dataclass
class Basket:
    id: str
    product_line_items: list[ProductLineItem] = field(default_factory=list)
    coupon_line_items: list[CouponLineItem] = field(default_factory=list)
    gift_certificate_line_items: list[GiftCertificateLineItem] = field(default_factory=list)
    shipments: list[Shipment] = field(default_factory=list)
    merchandise_total_price: PriceValue = field(default_factory=PriceValue)
    total_tax: PriceValue = field(default_factory=PriceValue)

    @property
    def default_shipment(self) -> Optional[Shipment]:
        """Shipment flagged as default, falling back to the first one."""
        for shipment in self.shipments:
            if shipment.is_default:
                return shipment
        return self.shipments[0] if self.shipments else None

    def line_items_for(self, shipment: Shipment) -> list[ProductLineItem]:
        return [item for item in self.product_line_items if item.shipment is shipment]
