"""Global FastAPI dependencies for the checkout gate.

This module provides:
- get_gate_config: Rule configuration captured from settings
- get_inventory_evaluator: The configured inventory strategy, built once
- get_validation_engine: CheckoutValidationEngine wired with both

Tests override get_inventory_evaluator through app.dependency_overrides to
avoid calling the real inventory service.
"""

from functools import lru_cache

from fastapi import Depends

from config import get_settings
from connectors.promotions import InMemoryPromotionCatalog
from connectors.registry import InventoryStrategyRegistry
from domain.checkout.engine import CheckoutValidationEngine
from domain.checkout.models import GateConfig
from domain.checkout.port import InventoryEvaluatorPort


def get_gate_config() -> GateConfig:
    return GateConfig.from_settings(get_settings())


@lru_cache()
def get_inventory_evaluator() -> InventoryEvaluatorPort:
    """Resolve the inventory strategy named by INVENTORY_STRATEGY.

    Cached so the strategy (and its HTTP client) is selected once per process.

    Raises:
        ValueError: If the configured strategy is not registered
    """
    settings = get_settings()
    return InventoryStrategyRegistry.get(settings.INVENTORY_STRATEGY, settings)


def get_validation_engine(
    config: GateConfig = Depends(get_gate_config),
    inventory_evaluator: InventoryEvaluatorPort = Depends(get_inventory_evaluator)
) -> CheckoutValidationEngine:
    """Build the engine for one request.

    Promotions travel with the basket snapshot, so the in-memory catalog is enough.
    """
    return CheckoutValidationEngine(
        config=config,
        inventory_evaluator=inventory_evaluator,
        promotions=InMemoryPromotionCatalog()
    )
