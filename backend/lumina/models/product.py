# backend/lumina/models/product.py

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

# filter sentinel, never stored on a product
ALL_CATEGORIES = "All"

PRODUCT_CATEGORIES = (
    "Alcoholic",
    "Non-Alcoholic",
    "Snacks",
    "Rice",
    "Bakery",
    "Frozen",
    "Personal Care",
    "Canned Goods",
)

CATEGORY_CHOICES = (ALL_CATEGORIES,) + PRODUCT_CATEGORIES


class Product(BaseModel):
    id: int

    batch_id: Optional[str] = None
    barcode: Optional[str] = None
    name: str
    category: str
    description: Optional[str] = None

    price: float = 0.0
    cost: float = 0.0

    stock: int = 0
    min_stock: int = 0

    # None = does not expire
    expiry_date: Optional[date] = None

    # soft delete
    is_active: bool = True

    # timestamps
    created_at: datetime
    updated_at: datetime

    class Config:
        frozen = True

    @property
    def margin(self) -> float:
        return self.price - self.cost

    @property
    def margin_percent(self) -> float:
        if self.cost == 0:
            return 0.0
        return self.margin / self.cost * 100


class ProductDraft(BaseModel):
    batch_id: Optional[str] = None
    barcode: Optional[str] = None
    name: str
    category: str
    description: Optional[str] = None

    price: float = 0.0
    cost: float = 0.0

    stock: int = 0
    min_stock: int = 0

    expiry_date: Optional[date] = None
    is_active: bool = True


class ProductPatch(BaseModel):
    batch_id: Optional[str] = None
    barcode: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None

    price: Optional[float] = None
    cost: Optional[float] = None

    stock: Optional[int] = None
    min_stock: Optional[int] = None

    expiry_date: Optional[date] = None
    is_active: Optional[bool] = None
