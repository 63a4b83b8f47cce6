from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel

from lumina.core.store import utcnow
from lumina.models.product import Product
from lumina.services.stock import at_or_below_reorder_point, is_expired


class InventoryStats(BaseModel):
    total_products: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    expired_count: int = 0


def aggregate(snapshot: Iterable[Product], now: Optional[datetime] = None) -> InventoryStats:
    """
    Headline numbers for the whole store, archived records included.

    low_stock_count counts everything at or below its reorder point, so
    out-of-stock records are included here even though classify() keeps them
    in a separate bucket.
    """
    now = now or utcnow()
    stats = InventoryStats()

    for p in snapshot:
        stats.total_products += 1
        stats.total_value += p.stock * p.price
        if at_or_below_reorder_point(p):
            stats.low_stock_count += 1
        if is_expired(p, now):
            stats.expired_count += 1

    return stats
