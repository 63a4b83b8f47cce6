from datetime import datetime, timezone

from lumina.services.insights import DESCRIPTION_FALLBACK, INSIGHTS_FALLBACK


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_categories(client):
    res = client.get("/api/categories")
    assert res.status_code == 200
    assert res.json()[0] == "All"
    assert len(res.json()) == 9


def test_list_products_default(client):
    res = client.get("/api/products")
    assert res.status_code == 200
    names = [p["name"] for p in res.json()]
    assert len(names) == 7
    assert names == sorted(names)


def test_list_products_includes_derived_fields(client):
    res = client.get("/api/products", params={"search": "coke"})
    [coke] = res.json()
    assert coke["name"] == "Coke Zero 1.5L"
    assert coke["stock_status"] == "Low Stock"
    assert coke["is_expired"] is True
    assert coke["margin_value"] == 17.0


def test_list_products_sorted(client):
    res = client.get("/api/products", params={"sort_field": "price", "sort_order": "desc"})
    prices = [p["price"] for p in res.json()]
    assert prices == sorted(prices, reverse=True)


def test_list_products_filters(client):
    res = client.get("/api/products", params={"category": "Bakery", "stock_status": "LowStock"})
    assert [p["name"] for p in res.json()] == ["Gardenia White Bread"]


def test_list_products_rejects_bad_criteria(client):
    assert client.get("/api/products", params={"sort_field": "barcode"}).status_code == 400
    assert client.get("/api/products", params={"stock_status": "Expired"}).status_code == 400
    assert client.get("/api/products", params={"category": "Toys"}).status_code == 400


def test_get_product(client):
    assert client.get("/api/products/3").json()["name"] == "Jasmine Rice 1kg"
    assert client.get("/api/products/99").status_code == 404


def test_create_product(client):
    res = client.post(
        "/api/products",
        json={"name": "Spam Classic", "category": "Canned Goods", "price": 120, "cost": 90, "stock": 0, "min_stock": 6},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["id"] == 8
    assert body["stock_status"] == "Out of Stock"
    assert body["expiry_date"] is None


def test_create_product_validation(client):
    assert client.post("/api/products", json={"name": " ", "category": "Snacks"}).status_code == 400
    assert client.post("/api/products", json={"name": "X", "category": "All"}).status_code == 400
    assert client.post("/api/products", json={"name": "X", "category": "Snacks", "stock": -1}).status_code == 422


def test_update_product(client):
    res = client.patch("/api/products/2", json={"stock": 40})
    assert res.status_code == 200
    assert res.json()["stock"] == 40
    assert res.json()["stock_status"] == "In Stock"

    assert client.patch("/api/products/99", json={"stock": 1}).status_code == 404
    assert client.patch("/api/products/2", json={"name": ""}).status_code == 400


def test_toggle_active(client):
    res = client.post("/api/products/1/toggle-active")
    assert res.json()["is_active"] is False
    assert client.post("/api/products/1/toggle-active").json()["is_active"] is True
    assert client.post("/api/products/99/toggle-active").status_code == 404


def test_stats_ignore_filters(client):
    body = client.get("/api/stats").json()
    assert body["total_products"] == 7
    assert body["low_stock_count"] == 3
    assert body["total_value"] == 15580


def test_export_csv(client):
    res = client.get("/api/products.csv", params={"stock_status": "LowStock"})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")

    today = datetime.now(timezone.utc).date().isoformat()
    assert f'filename="inventory_{today}.csv"' in res.headers["content-disposition"]

    assert res.content.startswith(b"\xef\xbb\xbf")
    lines = res.content.decode("utf-8-sig").strip().split("\r\n")
    # header + three low-stock products
    assert len(lines) == 4


def test_export_csv_empty_view(client):
    res = client.get("/api/products.csv", params={"search": "no such product"})
    assert res.status_code == 404


def test_ai_endpoints_fall_back_when_offline(client):
    res = client.post("/api/ai/description", json={"name": "Spam", "category": "Canned Goods"})
    assert res.json() == {"description": DESCRIPTION_FALLBACK}

    res = client.post("/api/ai/insights")
    assert res.json() == {"html": INSIGHTS_FALLBACK}
