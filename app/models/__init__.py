# app/models/__init__.py
from .item import Item
from .inventory import Inventory
from .distributor import Distributor, DistributorPrice

# Export all models
__all__ = [
    "Item",
    "Inventory",
    "Distributor",
    "DistributorPrice",
]
