"""Store inventory aggregation for store-pickup shipments.

Collects every (store, product) pair routed to a pickup store, issues a single
batched lookup and reconciles the returned quantities against the requested
ones. Also hosts the two inventory evaluator strategies.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .basket import Basket, Shipment
from .exceptions import DataIntegrityError
from .models import (
    GateConfig,
    InventoryAvailability,
    InventoryCheck,
    InventoryLevel,
    InventoryRecord,
    InventoryRequest,
    InventoryRequestGroup,
    RuleEvaluation,
    inventory_key
)
from .port import BasketInventoryValidatorPort, InventoryEvaluatorPort, InventoryLookupPort


logger = logging.getLogger(__name__)

RULE_NAME = "store_inventory"


def is_store_pickup(shipment: Optional[Shipment], config: GateConfig) -> bool:
    """True when the shipment is routed to a store rather than a shipping address."""
    if shipment is None or not shipment.store_id:
        return False
    return shipment.store_id != config.default_shipping_id


def store_routed_shipments(basket: Basket, config: GateConfig) -> list[Shipment]:
    return [shipment for shipment in basket.shipments if is_store_pickup(shipment, config)]


def build_inventory_request(basket: Basket, config: GateConfig) -> InventoryRequest:
    """Build the batched lookup request.

    Each store-routed shipment contributes its own group, even when another
    shipment targets the same store. Shipments without line items are skipped.
    """
    groups = []
    for shipment in store_routed_shipments(basket, config):
        product_ids = [item.product_id for item in basket.line_items_for(shipment)]
        if product_ids:
            groups.append(InventoryRequestGroup(store_id=shipment.store_id, product_ids=product_ids))
    return InventoryRequest(groups=groups)


def is_insufficient(available: int, requested: int, config: GateConfig) -> bool:
    # The limited-stock threshold counts as out of stock even when it covers the request
    return available < requested or available == config.limited_stock_threshold


@dataclass
class InventoryReconciliation:
    available: bool = True
    matrix: dict[str, InventoryRecord] = field(default_factory=dict)
    shortages: list[str] = field(default_factory=list)


def reconcile_inventory(
    basket: Basket,
    levels: dict[str, InventoryLevel],
    config: GateConfig
) -> InventoryReconciliation:
    """Compare looked-up store inventory with requested quantities.

    Quantities requested for the same store/product key, whether by several
    line items or by several shipments to one store, are summed before the
    comparison, so a key once insufficient stays insufficient.

    Raises:
        DataIntegrityError: If the response lacks a requested store/product key
    """
    reconciliation = InventoryReconciliation()

    for shipment in store_routed_shipments(basket, config):
        for item in basket.line_items_for(shipment):
            key = inventory_key(shipment.store_id, item.product_id)
            level = levels.get(key)
            if level is None:
                raise DataIntegrityError(
                    f"Inventory response has no entry for store '{shipment.store_id}' "
                    f"and product '{item.product_id}'",
                    details={"key": key, "store_id": shipment.store_id, "product_id": item.product_id}
                )

            # Line items sharing a store/product key draw on the same store stock
            previous = reconciliation.matrix.get(key)
            requested = item.quantity + (previous.requested_quantity if previous else 0)

            insufficient = is_insufficient(level.quantity, requested, config)
            reconciliation.matrix[key] = InventoryRecord(
                store_id=shipment.store_id,
                product_id=item.product_id,
                available_quantity=level.quantity,
                requested_quantity=requested,
                availability=(
                    InventoryAvailability.INSUFFICIENT if insufficient
                    else InventoryAvailability.IN_STOCK
                ),
            )

            if insufficient:
                reconciliation.available = False
                if key not in reconciliation.shortages:
                    reconciliation.shortages.append(key)

    return reconciliation


class StoreInventoryEvaluator(InventoryEvaluatorPort):
    """Inventory strategy backed by the batched store inventory lookup."""

    def __init__(self, lookup: InventoryLookupPort):
        self.lookup = lookup

    def evaluate(self, basket: Basket, config: GateConfig) -> InventoryCheck:
        request = build_inventory_request(basket, config)
        if request.is_empty:
            return InventoryCheck(evaluation=RuleEvaluation.ok(RULE_NAME))

        levels = self.lookup.lookup(request)
        reconciliation = reconcile_inventory(basket, levels, config)

        if not reconciliation.available:
            logger.debug(
                f"Store inventory short for basket {basket.id}: {reconciliation.shortages}"
            )
            evaluation = RuleEvaluation.fail(
                RULE_NAME,
                enable_checkout=False,
                shortages=reconciliation.shortages
            )
        else:
            evaluation = RuleEvaluation.ok(RULE_NAME)

        return InventoryCheck(evaluation=evaluation, matrix=reconciliation.matrix)


class BasketValidatorInventoryEvaluator(InventoryEvaluatorPort):
    """Inventory strategy that delegates to a basket inventory validator."""

    def __init__(self, validator: BasketInventoryValidatorPort):
        self.validator = validator

    def evaluate(self, basket: Basket, config: GateConfig) -> InventoryCheck:
        if self.validator.validate(basket):
            return InventoryCheck(evaluation=RuleEvaluation.ok(RULE_NAME))
        return InventoryCheck(evaluation=RuleEvaluation.fail(RULE_NAME, enable_checkout=False))
