from datetime import date

from lumina.core.store import ProductStore
from lumina.models.product import ProductDraft

DEMO_PRODUCTS = [
    ProductDraft(
        barcode="4800016055321",
        name="San Mig Light 330ml",
        category="Alcoholic",
        description="Low calorie beer, light and refreshing taste.",
        price=45.00,
        cost=32.50,
        stock=120,
        min_stock=24,
        expiry_date=date(2024, 12, 31),
    ),
    ProductDraft(
        barcode="4807770270017",
        name="Piattos Cheese - Large",
        category="Snacks",
        description="Crispy hexagonal potato chips with cheese flavor.",
        price=38.00,
        cost=28.00,
        stock=15,
        min_stock=20,
        expiry_date=date(2024, 6, 15),
    ),
    ProductDraft(
        name="Jasmine Rice 1kg",
        category="Rice",
        description="Premium grade fragrant jasmine rice.",
        price=55.00,
        cost=42.00,
        stock=50,
        min_stock=10,
    ),
    ProductDraft(
        barcode="4806502341219",
        name="Coke Zero 1.5L",
        category="Non-Alcoholic",
        description="Zero sugar cola beverage.",
        price=75.00,
        cost=58.00,
        stock=8,
        min_stock=12,
        expiry_date=date(2024, 1, 20),
    ),
    ProductDraft(
        barcode="4800045612345",
        name="Gardenia White Bread",
        category="Bakery",
        description="Freshly baked white bread loaf.",
        price=82.00,
        cost=65.00,
        stock=5,
        min_stock=10,
        expiry_date=date(2023, 10, 25),
    ),
    ProductDraft(
        barcode="4801234567890",
        name="Cornetto Vanilla",
        category="Frozen",
        description="Vanilla ice cream cone with chocolate tip.",
        price=30.00,
        cost=20.00,
        stock=45,
        min_stock=10,
        expiry_date=date(2024, 8, 30),
    ),
    ProductDraft(
        barcode="4809876543210",
        name="Safeguard White Soap",
        category="Personal Care",
        description="Antibacterial bar soap.",
        price=45.00,
        cost=35.00,
        stock=100,
        min_stock=20,
        expiry_date=date(2026, 1, 1),
    ),
]


def seed_demo_products(store: ProductStore) -> int:
    # only seed an empty store
    if len(store) > 0:
        return 0

    for draft in DEMO_PRODUCTS:
        store.add(draft)
    return len(DEMO_PRODUCTS)
