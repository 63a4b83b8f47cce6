# backend/lumina/services/export.py

import csv
import io
from datetime import date
from typing import List, Sequence

from lumina.core.errors import EmptyInputError
from lumina.models.product import Product
from lumina.services.stock import classify

BOM = "\ufeff"

EXPORT_COLUMNS = [
    "Batch ID",
    "Product Name",
    "Category",
    "Description",
    "Price",
    "Cost",
    "Stock",
    "Min Stock",
    "Status",
    "Expiry Date",
    "Barcode",
    "Last Updated",
]

NO_EXPIRY = "N/A"
BATCH_PREFIX = "B"


def batch_identifier(p: Product) -> str:
    if p.batch_id:
        return p.batch_id
    return f"{BATCH_PREFIX}{p.id % 1000:03d}"


def format_currency(amount: float, symbol: str) -> str:
    return f"{symbol}{amount:.2f}"


def export_row(p: Product, currency_symbol: str) -> List[object]:
    return [
        batch_identifier(p),
        p.name,
        p.category,
        p.description,
        format_currency(p.price, currency_symbol),
        format_currency(p.cost, currency_symbol),
        p.stock,
        p.min_stock,
        classify(p.stock, p.min_stock),
        p.expiry_date.isoformat() if p.expiry_date else NO_EXPIRY,
        p.barcode,
        p.updated_at.date().isoformat(),
    ]


def serialize(records: Sequence[Product], currency_symbol: str = "₱") -> str:
    """
    CSV text for spreadsheet tools: BOM prefix, every field quoted, quotes
    doubled, None written as an empty quoted field.

    Raises EmptyInputError for zero records rather than emitting a header-only
    file; callers are expected to check first.
    """
    if not records:
        raise EmptyInputError("Nothing to export")

    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_ALL)
    w.writerow(EXPORT_COLUMNS)

    for p in records:
        w.writerow(export_row(p, currency_symbol))

    return BOM + buf.getvalue()


def export_filename(prefix: str, today: date) -> str:
    return f"{prefix}_{today.isoformat()}.csv"
