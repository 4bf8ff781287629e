"""
Mock Inventory Lookup - In-memory store inventory for testing

Serves store inventory from a fixed table without calling the external
service. Used for unit tests and local development.
"""

import logging
from typing import Optional

from domain.checkout.exceptions import InventoryLookupError
from domain.checkout.models import InventoryLevel, InventoryRequest, inventory_key
from domain.checkout.port import InventoryLookupPort


logger = logging.getLogger(__name__)


class InMemoryInventoryLookup(InventoryLookupPort):
    """
    In-memory store inventory.

    Keys not present in the table are omitted from the response, the same way
    the real service omits unknown store/product pairs.

    Configuration:
        - levels: {(store_id, product_id): quantity}
        - mode: "success" | "failure" (default: "success")

    Usage:
        lookup = InMemoryInventoryLookup({("S1", "P1"): 5})
        levels = lookup.lookup(request)
        assert len(lookup.requests) == 1
    """

    def __init__(self, levels: Optional[dict[tuple[str, str], int]] = None, mode: str = "success"):
        self.levels = dict(levels or {})
        self.mode = mode
        self.requests: list[InventoryRequest] = []

    def set_quantity(self, store_id: str, product_id: str, quantity: int) -> None:
        self.levels[(store_id, product_id)] = quantity

    def lookup(self, request: InventoryRequest) -> dict[str, InventoryLevel]:
        self.requests.append(request)

        if self.mode == "failure":
            logger.info("InMemoryInventoryLookup: Simulating lookup failure")
            raise InventoryLookupError("Mock inventory lookup simulated failure")

        response = {}
        for group in request.groups:
            for product_id in group.product_ids:
                quantity = self.levels.get((group.store_id, product_id))
                if quantity is None:
                    continue
                response[inventory_key(group.store_id, product_id)] = InventoryLevel(
                    quantity=quantity,
                    availability=1 if quantity > 0 else -1
                )

        return response
