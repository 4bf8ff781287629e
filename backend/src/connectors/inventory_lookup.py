"""
HTTP Inventory Lookup - adapter for the external store inventory service

Posts the batched store inventory request and maps the response onto
InventoryLevel values keyed by the composite store/product key.

Request body:
    {"stores": [{"storeId": "S1", "productIds": ["P1", "P2"]}, ...]}

Response body:
    {"S1P1": {"quantity": 4, "availability": 1}, ...}
"""

import logging
import time
from typing import Any, Optional

import httpx

from domain.checkout.exceptions import DataIntegrityError, InventoryLookupError
from domain.checkout.models import InventoryLevel, InventoryRequest
from domain.checkout.port import InventoryLookupPort
from observability.metrics import inventory_lookup_duration_seconds, inventory_lookups_total


logger = logging.getLogger(__name__)


class HttpInventoryLookup(InventoryLookupPort):
    """
    Store inventory lookup over HTTP.

    The lookup is the only blocking call of a validation run; the configured
    timeout bounds it and is the run's only cancellation point.

    Usage:
        lookup = HttpInventoryLookup("https://inventory.internal/stores", timeout_seconds=5.0)
        levels = lookup.lookup(request)
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5.0,
        client: Optional[httpx.Client] = None
    ):
        if not url:
            raise ValueError("Inventory service URL is required")
        self.url = url
        self.timeout = httpx.Timeout(timeout_seconds)
        self.client = client or httpx.Client(timeout=self.timeout)

    def lookup(self, request: InventoryRequest) -> dict[str, InventoryLevel]:
        payload = request.to_payload()
        start_time = time.monotonic()

        try:
            response = self.client.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            inventory_lookups_total.labels(result="timeout").inc()
            logger.error(f"Inventory lookup timed out after {self.timeout.read}s: {e}")
            raise InventoryLookupError(
                "Store inventory lookup timed out",
                details={"url": self.url}
            ) from e
        except httpx.HTTPStatusError as e:
            inventory_lookups_total.labels(result="error").inc()
            logger.error(f"Inventory lookup returned HTTP {e.response.status_code}")
            raise InventoryLookupError(
                f"Store inventory lookup failed with HTTP {e.response.status_code}",
                details={"url": self.url, "status_code": e.response.status_code}
            ) from e
        except httpx.HTTPError as e:
            inventory_lookups_total.labels(result="error").inc()
            logger.error(f"Inventory lookup failed: {e}", exc_info=True)
            raise InventoryLookupError(
                f"Store inventory lookup failed: {e}",
                details={"url": self.url}
            ) from e
        finally:
            inventory_lookup_duration_seconds.observe(time.monotonic() - start_time)

        inventory_lookups_total.labels(result="success").inc()

        try:
            body = response.json()
        except ValueError as e:
            raise DataIntegrityError("Inventory response is not valid JSON") from e

        levels = parse_inventory_response(body)
        logger.debug(
            f"Inventory lookup returned {len(levels)} entries for {len(request.groups)} store groups"
        )
        return levels

    def close(self) -> None:
        self.client.close()


def parse_inventory_response(body: Any) -> dict[str, InventoryLevel]:
    """Map a lookup response body onto InventoryLevel values.

    Raises:
        DataIntegrityError: If the body is not an object or an entry lacks a quantity
    """
    if not isinstance(body, dict):
        raise DataIntegrityError(
            f"Inventory response must be an object, got {type(body).__name__}"
        )

    levels = {}
    for key, entry in body.items():
        try:
            quantity = int(entry["quantity"])
        except (KeyError, TypeError, ValueError) as e:
            raise DataIntegrityError(
                f"Inventory entry '{key}' has no usable quantity",
                details={"key": key}
            ) from e
        levels[key] = InventoryLevel(quantity=quantity, availability=entry.get("availability"))

    return levels
