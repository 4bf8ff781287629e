"""Port interfaces for the checkout gate's external collaborators"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from .basket import Basket, Product, Promotion
from .models import GateConfig, InventoryCheck, InventoryLevel, InventoryRequest


Clock = Callable[[], datetime]


class InventoryLookupPort(ABC):
    """Port interface for the external store inventory service.

    Implementations receive one batched request per validation run and return
    inventory keyed by the composite store/product key (see inventory_key).
    """

    @abstractmethod
    def lookup(self, request: InventoryRequest) -> dict[str, InventoryLevel]:
        """Look up store inventory for every group in the request.

        Args:
            request: Non-empty batched request

        Returns:
            Mapping of composite key to InventoryLevel

        Raises:
            InventoryLookupError: If the service cannot be reached or answers with an error
        """
        pass


class BasketInventoryValidatorPort(ABC):
    """Port interface for a platform-provided basket inventory validator."""

    @abstractmethod
    def validate(self, basket: Basket) -> bool:
        """Return True when every line item's quantity can be allocated."""
        pass


class PromotionCatalogPort(ABC):
    """Port interface for the promotion catalog."""

    @abstractmethod
    def active_promotions_for(self, product: Product) -> list[Promotion]:
        """Return the promotions currently active for a product."""
        pass


class InventoryEvaluatorPort(ABC):
    """Strategy interface for the inventory rule.

    Two interchangeable implementations exist; one is selected when the
    application is configured, never per request.
    """

    @abstractmethod
    def evaluate(self, basket: Basket, config: GateConfig) -> InventoryCheck:
        pass
