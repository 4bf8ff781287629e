"""
Connectors module - adapters for the checkout gate's external collaborators

Provides implementations of the domain ports:
- HttpInventoryLookup: store inventory lookup service over HTTP
- AvailabilityModelBasketValidator: basket inventory validation from web availability
- InMemoryPromotionCatalog: promotions carried with the products
- InventoryStrategyRegistry: resolution of the configured inventory strategy
"""

from .inventory_lookup import HttpInventoryLookup
from .basket_validator import AvailabilityModelBasketValidator
from .promotions import InMemoryPromotionCatalog
from .registry import InventoryStrategyRegistry

__all__ = [
    "HttpInventoryLookup",
    "AvailabilityModelBasketValidator",
    "InMemoryPromotionCatalog",
    "InventoryStrategyRegistry",
]
