"""Pytest fixtures for checkout gate testing.

Provides reusable test fixtures for:
- Gate configuration and a frozen clock
- Product, line item, shipment and basket builders
- In-memory inventory lookup and a wired CheckoutValidationEngine

Usage:
    def test_empty_basket(make_basket, make_engine):
        outcome = make_engine().validate(make_basket(items=[]))
        assert outcome.enable_checkout is False
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from domain.checkout.basket import (
    PRODUCT_TYPE_CLASS,
    PRODUCT_TYPE_PRODUCT,
    SALES_CHANNEL_SCHEDULED,
    Address,
    AvailabilityModel,
    Basket,
    CouponLineItem,
    PriceValue,
    Product,
    ProductLineItem,
    Promotion,
    Shipment
)
from domain.checkout.engine import CheckoutValidationEngine
from domain.checkout.inventory import StoreInventoryEvaluator
from domain.checkout.models import GateConfig
from connectors.implementations.mock_inventory import InMemoryInventoryLookup
from connectors.promotions import InMemoryPromotionCatalog


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
CLASS_DATE_FORMAT = "%m/%d/%Y %I:%M %p"


@pytest.fixture
def gate_config() -> GateConfig:
    return GateConfig(
        default_shipping_id="me",
        limited_stock_threshold=1,
        ignore_max_quantity=False,
        class_cutoff_hours=48,
        class_date_format=CLASS_DATE_FORMAT,
        class_timezone="UTC",
    )


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def make_product():
    def _make(
        product_id: str = "P1",
        ats: int = 100,
        online: bool = True,
        max_order_quantity=None,
        min_quantity_promotions=(),
        perpetual: bool = False,
    ) -> Product:
        return Product(
            id=product_id,
            online=online,
            availability_model=AvailabilityModel(ats=ats, perpetual=perpetual),
            max_order_quantity=max_order_quantity,
            promotions=[
                Promotion(id=f"promo-{i}", attributes={"minQuantity": minimum})
                for i, minimum in enumerate(min_quantity_promotions)
            ],
        )
    return _make


@pytest.fixture
def web_shipment() -> Shipment:
    return Shipment(
        id="me",
        store_id=None,
        shipping_address=Address(
            address1="123 Main St",
            city="Springfield",
            postal_code="62704",
            country_code="US",
        ),
        is_default=True,
    )


@pytest.fixture
def make_store_shipment():
    def _make(store_id: str = "store-7", shipment_id=None) -> Shipment:
        return Shipment(id=shipment_id or f"pickup-{store_id}", store_id=store_id)
    return _make


@pytest.fixture
def make_item(make_product, web_shipment):
    def _make(
        product_id: str = "P1",
        quantity: int = 1,
        shipment=None,
        product=None,
        product_type: str = PRODUCT_TYPE_PRODUCT,
        with_product: bool = True,
        **attributes
    ) -> ProductLineItem:
        # with_product=False models a product deleted from the catalog
        if not with_product:
            product = None
        elif product is None:
            product = make_product(product_id)
        return ProductLineItem(
            product_id=product_id,
            product=product,
            quantity=quantity,
            shipment=shipment or web_shipment,
            product_type=product_type,
            **attributes
        )
    return _make


@pytest.fixture
def class_payload():
    def _make(start: datetime) -> str:
        return json.dumps({"classDate": start.strftime(CLASS_DATE_FORMAT), "room": "B"})
    return _make


@pytest.fixture
def make_class_item(make_item, class_payload):
    def _make(start: datetime, product_id: str = "CLASS-1", **kwargs) -> ProductLineItem:
        return make_item(
            product_id=product_id,
            product_type=PRODUCT_TYPE_CLASS,
            sales_channel=SALES_CHANNEL_SCHEDULED,
            class_payload=class_payload(start),
            **kwargs
        )
    return _make


@pytest.fixture
def make_basket(web_shipment, make_item):
    def _make(
        items=None,
        shipments=None,
        coupons=(),
        gift_certificates=(),
        merchandise_total_price=None,
        total_tax=None,
    ) -> Basket:
        line_items = [make_item()] if items is None else list(items)
        if shipments is None:
            shipments = [web_shipment]
            for item in line_items:
                if item.shipment is not None and item.shipment not in shipments:
                    shipments.append(item.shipment)
        return Basket(
            id="basket-1",
            product_line_items=line_items,
            coupon_line_items=[CouponLineItem(code=code, valid=valid) for code, valid in coupons],
            gift_certificate_line_items=list(gift_certificates),
            shipments=list(shipments),
            merchandise_total_price=merchandise_total_price or PriceValue(),
            total_tax=total_tax or PriceValue(),
        )
    return _make


@pytest.fixture
def inventory_lookup() -> InMemoryInventoryLookup:
    return InMemoryInventoryLookup()


@pytest.fixture
def make_engine(gate_config, clock, inventory_lookup):
    def _make(config=None, evaluator=None, promotions=None) -> CheckoutValidationEngine:
        return CheckoutValidationEngine(
            config=config or gate_config,
            inventory_evaluator=evaluator or StoreInventoryEvaluator(inventory_lookup),
            promotions=promotions or InMemoryPromotionCatalog(),
            clock=clock,
        )
    return _make
