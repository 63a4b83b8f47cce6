# backend/lumina/services/query.py

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Literal, Optional

from lumina.core.errors import InvalidCriteriaError
from lumina.models.product import ALL_CATEGORIES, CATEGORY_CHOICES, Product
from lumina.services.stock import IN_STOCK, LOW_STOCK, OUT_OF_STOCK, StockStatus, classify

StockFilter = Literal["All", "InStock", "LowStock", "OutOfStock"]
SortField = Literal["name", "stock", "price", "expiryDate"]
SortOrder = Literal["asc", "desc"]

STOCK_FILTER_STATUS: Dict[str, Optional[StockStatus]] = {
    "All": None,
    "InStock": IN_STOCK,
    "LowStock": LOW_STOCK,
    "OutOfStock": OUT_OF_STOCK,
}

SORT_KEYS: Dict[str, Callable[[Product], object]] = {
    "name": lambda p: p.name,
    "stock": lambda p: p.stock,
    "price": lambda p: p.price,
    "expiryDate": lambda p: p.expiry_date,
}

SORT_ORDERS = ("asc", "desc")


def _fold(value: str) -> str:
    # "Low Stock", "low_stock" and "LowStock" all fold to "lowstock"
    return value.replace(" ", "").replace("_", "").lower()


_STOCK_FILTER_LOOKUP = {_fold(k): k for k in STOCK_FILTER_STATUS}
_STOCK_FILTER_LOOKUP.update({_fold(s): k for k, s in STOCK_FILTER_STATUS.items() if s})
_SORT_FIELD_LOOKUP = {_fold(k): k for k in SORT_KEYS}


def _lookup(table: Dict[str, str], value, what: str) -> str:
    key = _fold(value) if isinstance(value, str) else None
    if key not in table:
        raise InvalidCriteriaError(f"Unknown {what}: {value!r}")
    return table[key]


@dataclass(frozen=True)
class QueryCriteria:
    """
    Everything that drives a single query. Raw strings are normalised on
    construction; anything unrecognised raises InvalidCriteriaError instead of
    falling back to a default.
    """

    search_term: str = ""
    category: str = ALL_CATEGORIES
    stock_filter: StockFilter = "All"
    sort_field: SortField = "name"
    sort_order: SortOrder = "asc"

    def __post_init__(self):
        object.__setattr__(self, "search_term", self.search_term or "")

        if self.category not in CATEGORY_CHOICES:
            raise InvalidCriteriaError(f"Unknown category: {self.category!r}")

        object.__setattr__(
            self, "stock_filter", _lookup(_STOCK_FILTER_LOOKUP, self.stock_filter, "stock filter")
        )
        object.__setattr__(
            self, "sort_field", _lookup(_SORT_FIELD_LOOKUP, self.sort_field, "sort field")
        )

        order = self.sort_order.lower() if isinstance(self.sort_order, str) else self.sort_order
        if order not in SORT_ORDERS:
            raise InvalidCriteriaError(f"Unknown sort order: {self.sort_order!r}")
        object.__setattr__(self, "sort_order", order)


def matches_search(p: Product, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    if needle in p.name.lower():
        return True
    return p.barcode is not None and needle in p.barcode.lower()


def matches_category(p: Product, category: str) -> bool:
    return category == ALL_CATEGORIES or p.category == category


def matches_stock_filter(p: Product, stock_filter: str) -> bool:
    wanted = STOCK_FILTER_STATUS[stock_filter]
    return wanted is None or classify(p.stock, p.min_stock) == wanted


def sort_products(products: Iterable[Product], field: str, order: str) -> List[Product]:
    key = SORT_KEYS[field]
    products = list(products)

    present = [p for p in products if key(p) is not None]
    absent = [p for p in products if key(p) is None]

    # sorted() stays stable with reverse=True; absent keys trail in both orders
    present = sorted(present, key=key, reverse=(order == "desc"))
    return present + absent


def query(snapshot: Iterable[Product], criteria: QueryCriteria) -> List[Product]:
    """Filtered, sorted view of a snapshot. Pure: same inputs, same output."""
    filtered = [
        p
        for p in snapshot
        if matches_search(p, criteria.search_term)
        and matches_category(p, criteria.category)
        and matches_stock_filter(p, criteria.stock_filter)
    ]
    return sort_products(filtered, criteria.sort_field, criteria.sort_order)
