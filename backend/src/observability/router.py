"""Observability API endpoints.

Provides metrics and health checks for monitoring.
"""

from fastapi import APIRouter, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from config import get_settings
from connectors.registry import InventoryStrategyRegistry

router = APIRouter(tags=["Observability"])


@router.get("/metrics", include_in_schema=False)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/health", summary="Health check endpoint")
def health_check():
    """Report liveness and the configured inventory strategy.

    The gate holds no connections of its own; the inventory service is only
    contacted during a validation run.
    """
    settings = get_settings()
    strategy = settings.INVENTORY_STRATEGY
    strategy_known = strategy in InventoryStrategyRegistry.list_available()

    return {
        "status": "healthy" if strategy_known else "degraded",
        "environment": settings.ENVIRONMENT,
        "inventory_strategy": strategy,
    }
