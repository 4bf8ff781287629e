"""
Inventory lookup implementations

Concrete InventoryLookupPort implementations that do not call the external
service.
"""

from .mock_inventory import InMemoryInventoryLookup

__all__ = ["InMemoryInventoryLookup"]
