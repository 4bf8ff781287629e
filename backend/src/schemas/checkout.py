"""Pydantic schemas for the checkout validation API"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from domain.checkout.basket import (
    PRODUCT_TYPE_PRODUCT,
    Address,
    AvailabilityModel,
    Basket,
    CouponLineItem,
    GiftCertificateLineItem,
    PriceState,
    PriceValue,
    Product,
    ProductLineItem,
    Promotion,
    Shipment
)
from domain.checkout.models import ValidationOutcome, ValidationStatus


class AddressSnapshot(BaseModel):
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None

    def to_domain(self) -> Address:
        return Address(**self.model_dump())


class ShipmentSnapshot(BaseModel):
    """Shipment; store_id is empty or the default shipping id for ship-to-address."""
    id: str
    store_id: Optional[str] = None
    shipping_address: Optional[AddressSnapshot] = None
    is_default: bool = False

    def to_domain(self) -> Shipment:
        return Shipment(
            id=self.id,
            store_id=self.store_id,
            shipping_address=self.shipping_address.to_domain() if self.shipping_address else None,
            is_default=self.is_default
        )


class AvailabilitySnapshot(BaseModel):
    ats: int = 0
    perpetual: bool = False
    backorder_allocation: int = 0
    preorder_allocation: int = 0


class PromotionSnapshot(BaseModel):
    id: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class ProductSnapshot(BaseModel):
    id: str
    online: bool = True
    availability: AvailabilitySnapshot = Field(default_factory=AvailabilitySnapshot)
    max_order_quantity: Optional[int] = None
    promotions: list[PromotionSnapshot] = Field(default_factory=list)

    def to_domain(self) -> Product:
        return Product(
            id=self.id,
            online=self.online,
            availability_model=AvailabilityModel(**self.availability.model_dump()),
            max_order_quantity=self.max_order_quantity,
            promotions=[Promotion(id=p.id, attributes=dict(p.attributes)) for p in self.promotions]
        )


class ProductLineItemSnapshot(BaseModel):
    """Product line item; product is null when the product was deleted or delisted."""
    product_id: str
    product: Optional[ProductSnapshot] = None
    quantity: int = Field(1, ge=0)
    shipment_id: Optional[str] = None
    product_type: Optional[str] = PRODUCT_TYPE_PRODUCT
    sales_channel: Optional[str] = None
    hazardous: bool = False
    source_channel: Optional[str] = None
    class_payload: Optional[str] = None


class CouponSnapshot(BaseModel):
    code: str
    valid: bool = True


class GiftCertificateSnapshot(BaseModel):
    id: str
    amount: Decimal = Decimal("0")


class PriceSnapshot(BaseModel):
    amount: Optional[Decimal] = Decimal("0.00")
    state: PriceState = PriceState.AVAILABLE

    def to_domain(self) -> PriceValue:
        return PriceValue(amount=self.amount, state=self.state)


class BasketSnapshot(BaseModel):
    """Point-in-time copy of a basket submitted for validation."""
    id: str
    product_line_items: list[ProductLineItemSnapshot] = Field(default_factory=list)
    coupon_line_items: list[CouponSnapshot] = Field(default_factory=list)
    gift_certificate_line_items: list[GiftCertificateSnapshot] = Field(default_factory=list)
    shipments: list[ShipmentSnapshot] = Field(default_factory=list)
    merchandise_total_price: PriceSnapshot = Field(default_factory=PriceSnapshot)
    total_tax: PriceSnapshot = Field(default_factory=PriceSnapshot)

    @model_validator(mode="after")
    def check_shipment_references(self) -> "BasketSnapshot":
        shipment_ids = [shipment.id for shipment in self.shipments]
        if len(set(shipment_ids)) != len(shipment_ids):
            raise ValueError("shipment ids must be unique")
        for item in self.product_line_items:
            if item.shipment_id is not None and item.shipment_id not in shipment_ids:
                raise ValueError(
                    f"line item '{item.product_id}' references unknown shipment '{item.shipment_id}'"
                )
        return self

    def to_domain(self) -> Basket:
        shipments = {snapshot.id: snapshot.to_domain() for snapshot in self.shipments}

        line_items = [
            ProductLineItem(
                product_id=item.product_id,
                product=item.product.to_domain() if item.product else None,
                quantity=item.quantity,
                shipment=shipments.get(item.shipment_id) if item.shipment_id else None,
                product_type=item.product_type,
                sales_channel=item.sales_channel,
                hazardous=item.hazardous,
                source_channel=item.source_channel,
                class_payload=item.class_payload
            )
            for item in self.product_line_items
        ]

        return Basket(
            id=self.id,
            product_line_items=line_items,
            coupon_line_items=[CouponLineItem(code=c.code, valid=c.valid) for c in self.coupon_line_items],
            gift_certificate_line_items=[
                GiftCertificateLineItem(id=g.id, amount=g.amount)
                for g in self.gift_certificate_line_items
            ],
            shipments=list(shipments.values()),
            merchandise_total_price=self.merchandise_total_price.to_domain(),
            total_tax=self.total_tax.to_domain()
        )


class CheckoutValidationRequest(BaseModel):
    """Request body for POST /checkout/validate."""
    basket: Optional[BasketSnapshot] = None
    validate_tax: bool = False


class InventoryRecordResponse(BaseModel):
    store_id: str
    product_id: str
    available_quantity: int
    requested_quantity: int
    availability: int


class CheckoutValidationResponse(BaseModel):
    """Outcome of a checkout validation run.

    reason is only present with status ERROR; enable_checkout can be false with
    status OK (empty basket).
    """
    status: ValidationStatus
    reason: Optional[str] = None
    enable_checkout: bool
    inventory_matrix: dict[str, InventoryRecordResponse] = Field(default_factory=dict)
    failed_rules: list[str] = Field(default_factory=list)
    min_order_quantities: dict[str, int] = Field(default_factory=dict)
    checked_at: str

    @classmethod
    def from_outcome(
        cls,
        outcome: ValidationOutcome,
        basket: Optional[Basket] = None
    ) -> "CheckoutValidationResponse":
        data = outcome.to_dict()
        if basket is not None:
            data["min_order_quantities"] = {
                item.product_id: item.min_order_quantity for item in basket.product_line_items
            }
        return cls(**data)
