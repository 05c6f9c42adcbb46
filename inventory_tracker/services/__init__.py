from inventory_tracker.services.catalog import CatalogManager
from inventory_tracker.services.ledger import StockLedger
from inventory_tracker.services.analytics import AnalyticsAggregator

__all__ = ["CatalogManager", "StockLedger", "AnalyticsAggregator"]
