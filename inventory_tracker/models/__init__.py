from inventory_tracker.models.users import User
from inventory_tracker.models.category import Category
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.product import Product
from inventory_tracker.models.reason import Reason, ReasonType
from inventory_tracker.models.stock import StockMovement
from inventory_tracker.models.log import Log
from inventory_tracker.models.locations import Region, Province, Municipality, Barangay

__all__ = [
    "User", "Category", "Supplier", "Product", "Reason", "ReasonType",
    "StockMovement", "Log", "Region", "Province", "Municipality", "Barangay",
]
