"""
Inventory Strategy Registry - registration and resolution of inventory evaluators

The InventoryStrategyRegistry maps strategy names to factories building an
InventoryEvaluatorPort from application settings. The strategy is resolved
once when the application is configured, never per request.
"""

from typing import Any, Callable, Dict

from domain.checkout.inventory import BasketValidatorInventoryEvaluator, StoreInventoryEvaluator
from domain.checkout.port import InventoryEvaluatorPort

from .basket_validator import AvailabilityModelBasketValidator
from .inventory_lookup import HttpInventoryLookup


StrategyFactory = Callable[[Any], InventoryEvaluatorPort]


class InventoryStrategyRegistry:
    """
    Registry for inventory evaluator strategies.

    Usage:
        # Register a strategy (typically at application startup)
        InventoryStrategyRegistry.register("STORE_LOOKUP", build_store_lookup_strategy)

        # Build the configured strategy
        evaluator = InventoryStrategyRegistry.get(settings.INVENTORY_STRATEGY, settings)

    Thread-safety: Read operations are thread-safe after initial registration.
    Registration should happen only at startup in the main thread.
    """

    _strategies: Dict[str, StrategyFactory] = {}

    @classmethod
    def register(cls, name: str, factory: StrategyFactory) -> None:
        """
        Register a strategy factory.

        Raises:
            ValueError: If name is empty
            RuntimeError: If name is already registered (prevents accidental override)
        """
        if not name or not name.strip():
            raise ValueError("strategy name cannot be empty")

        if name in cls._strategies:
            raise RuntimeError(
                f"Inventory strategy '{name}' is already registered. "
                f"Use unregister() first if you need to replace it."
            )

        cls._strategies[name] = factory

    @classmethod
    def get(cls, name: str, settings: Any) -> InventoryEvaluatorPort:
        """
        Build the evaluator for a strategy name.

        Raises:
            ValueError: If name is not registered
        """
        if name not in cls._strategies:
            available = ', '.join(sorted(cls._strategies)) if cls._strategies else 'none'
            raise ValueError(
                f"Unknown inventory strategy: '{name}'. "
                f"Available strategies: {available}"
            )

        return cls._strategies[name](settings)

    @classmethod
    def list_available(cls) -> list[str]:
        return sorted(cls._strategies.keys())

    @classmethod
    def unregister(cls, name: str) -> None:
        if name not in cls._strategies:
            raise ValueError(f"Inventory strategy '{name}' is not registered")

        del cls._strategies[name]


def build_store_lookup_strategy(settings: Any) -> InventoryEvaluatorPort:
    lookup = HttpInventoryLookup(
        settings.INVENTORY_SERVICE_URL,
        timeout_seconds=settings.INVENTORY_LOOKUP_TIMEOUT_SECONDS
    )
    return StoreInventoryEvaluator(lookup)


def build_basket_validator_strategy(settings: Any) -> InventoryEvaluatorPort:
    return BasketValidatorInventoryEvaluator(AvailabilityModelBasketValidator())


InventoryStrategyRegistry.register("STORE_LOOKUP", build_store_lookup_strategy)
InventoryStrategyRegistry.register("BASKET_VALIDATOR", build_basket_validator_strategy)
