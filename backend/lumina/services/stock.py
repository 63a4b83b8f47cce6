from datetime import date, datetime, time, timezone
from typing import Literal, Optional

from lumina.core.store import utcnow
from lumina.models.product import Product

StockStatus = Literal["In Stock", "Low Stock", "Out of Stock"]

IN_STOCK: StockStatus = "In Stock"
LOW_STOCK: StockStatus = "Low Stock"
OUT_OF_STOCK: StockStatus = "Out of Stock"

STOCK_STATUSES = (IN_STOCK, LOW_STOCK, OUT_OF_STOCK)


def classify(stock: int, min_stock: int) -> StockStatus:
    if stock == 0:
        return OUT_OF_STOCK
    if 0 < stock <= min_stock:
        return LOW_STOCK
    # includes negative stock, taken as given
    return IN_STOCK


def expiry_moment(expiry: date) -> datetime:
    # a product expires at the start of its expiry day (UTC)
    return datetime.combine(expiry, time.min, tzinfo=timezone.utc)


def is_expired(p: Product, now: Optional[datetime] = None) -> bool:
    if p.expiry_date is None:
        return False
    return expiry_moment(p.expiry_date) < (now or utcnow())


def at_or_below_reorder_point(p: Product) -> bool:
    # unlike classify(), this counts out-of-stock records too
    return p.stock <= p.min_stock
