import csv
import io
from datetime import date, datetime, timezone

import pytest

from lumina.core.errors import EmptyInputError
from lumina.services.export import (
    BOM,
    EXPORT_COLUMNS,
    batch_identifier,
    export_filename,
    serialize,
)


def _parse(text):
    assert text.startswith(BOM)
    return list(csv.reader(io.StringIO(text[len(BOM):], newline="")))


def test_empty_input_is_rejected():
    with pytest.raises(EmptyInputError):
        serialize([])


def test_header_and_quoting(make_product):
    text = serialize([make_product(1)])
    header = text[len(BOM):].split("\r\n")[0]
    assert header == ",".join(f'"{c}"' for c in EXPORT_COLUMNS)


def test_round_trip(make_product):
    p = make_product(
        7,
        name='Piattos "Large", cheese',
        category="Snacks",
        description=None,
        price=38,
        cost=28.5,
        stock=15,
        min_stock=20,
        expiry_date=date(2024, 6, 15),
        barcode="4807770270017",
        updated_at=datetime(2023, 10, 10, 11, 0, tzinfo=timezone.utc),
    )
    rows = _parse(serialize([p]))

    assert rows[0] == EXPORT_COLUMNS
    assert rows[1] == [
        "B007",
        'Piattos "Large", cheese',
        "Snacks",
        "",
        "₱38.00",
        "₱28.50",
        "15",
        "20",
        "Low Stock",
        "2024-06-15",
        "4807770270017",
        "2023-10-10",
    ]


def test_absent_values(make_product):
    text = serialize([make_product(3, barcode=None, expiry_date=None, description=None, stock=0)])
    row = _parse(text)[1]

    assert row[3] == ""
    assert row[8] == "Out of Stock"
    assert row[9] == "N/A"
    assert row[10] == ""
    # absent values still get quotes
    assert ',"",' in text


def test_embedded_quotes_are_doubled(make_product):
    text = serialize([make_product(1, description='He said "fresh"')])
    assert '"He said ""fresh"""' in text


def test_currency_symbol(make_product):
    row = _parse(serialize([make_product(1, price=5)], currency_symbol="$"))[1]
    assert row[4] == "$5.00"


def test_rows_follow_input_order_and_end_with_crlf(make_product):
    text = serialize([make_product(2), make_product(1)])
    assert [r[0] for r in _parse(text)[1:]] == ["B002", "B001"]
    assert text.endswith("\r\n")


def test_serialize_is_deterministic(demo_store):
    snapshot = demo_store.snapshot()
    assert serialize(snapshot) == serialize(snapshot)


@pytest.mark.parametrize(
    "product_id, batch_id, expected",
    [
        (7, None, "B007"),
        (42, None, "B042"),
        (1234, None, "B234"),
        (5, "LOT-2024-09", "LOT-2024-09"),
    ],
)
def test_batch_identifier(make_product, product_id, batch_id, expected):
    assert batch_identifier(make_product(product_id, batch_id=batch_id)) == expected


def test_export_filename():
    assert export_filename("inventory", date(2026, 10, 19)) == "inventory_2026-10-19.csv"
