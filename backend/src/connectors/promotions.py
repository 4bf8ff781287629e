"""
In-memory promotion catalog

Resolves the active promotions attached to each product. Used when the basket
snapshot carries its promotions inline (HTTP API) and in tests.
"""

from typing import Optional

from domain.checkout.basket import Product, Promotion
from domain.checkout.port import PromotionCatalogPort


class InMemoryPromotionCatalog(PromotionCatalogPort):
    """
    Promotion catalog backed by the products themselves plus an optional
    table of extra promotions keyed by product id.
    """

    def __init__(self, extra: Optional[dict[str, list[Promotion]]] = None):
        self.extra = extra or {}

    def active_promotions_for(self, product: Product) -> list[Promotion]:
        return list(product.promotions) + list(self.extra.get(product.id, []))
