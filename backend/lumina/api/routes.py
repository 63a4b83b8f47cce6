# backend/lumina/api/routes.py

import io
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from lumina.api.deps import get_insights_client, get_store
from lumina.core.config import Settings, get_settings
from lumina.core.errors import EmptyInputError, InvalidCriteriaError, NotFoundError, ValidationError
from lumina.core.store import ProductStore, utcnow
from lumina.models.product import CATEGORY_CHOICES, Product, ProductDraft, ProductPatch
from lumina.services.export import export_filename, serialize
from lumina.services.insights import InsightsClient
from lumina.services.query import QueryCriteria, query
from lumina.services.stats import InventoryStats, aggregate
from lumina.services.stock import StockStatus, classify, is_expired

router = APIRouter()

# ---------- SCHEMAS ----------


class ProductOut(Product):
    # derived on every read, never stored
    stock_status: StockStatus
    is_expired: bool
    margin_value: float
    margin_pct: float

    @classmethod
    def from_product(cls, p: Product, now: datetime) -> "ProductOut":
        return cls(
            **p.model_dump(),
            stock_status=classify(p.stock, p.min_stock),
            is_expired=is_expired(p, now),
            margin_value=p.margin,
            margin_pct=p.margin_percent,
        )


class ProductCreate(BaseModel):
    batch_id: Optional[str] = None
    barcode: Optional[str] = None
    name: str
    category: str
    description: Optional[str] = None

    price: float = Field(0.0, ge=0)
    cost: float = Field(0.0, ge=0)
    stock: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0)

    expiry_date: Optional[date] = None
    is_active: bool = True


class ProductUpdate(BaseModel):
    batch_id: Optional[str] = None
    barcode: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None

    price: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)

    expiry_date: Optional[date] = None
    is_active: Optional[bool] = None


class DescriptionIn(BaseModel):
    name: str
    category: str


class DescriptionOut(BaseModel):
    description: str


class InsightsOut(BaseModel):
    html: str


# ---------- QUERY PARAMS ----------


def get_criteria(
    search: str = Query(""),
    category: str = Query("All"),
    stock_status: str = Query("All"),
    sort_field: str = Query("name"),
    sort_order: str = Query("asc"),
) -> QueryCriteria:
    try:
        return QueryCriteria(
            search_term=search,
            category=category,
            stock_filter=stock_status,
            sort_field=sort_field,
            sort_order=sort_order,
        )
    except InvalidCriteriaError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _bad_request(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# ---------- ROUTES ----------


@router.get("/categories", response_model=List[str])
def list_categories():
    return list(CATEGORY_CHOICES)


@router.get("/products", response_model=List[ProductOut])
def list_products(
    criteria: QueryCriteria = Depends(get_criteria),
    store: ProductStore = Depends(get_store),
):
    now = utcnow()
    return [ProductOut.from_product(p, now) for p in query(store.snapshot(), criteria)]


@router.get("/products.csv")
def export_products_csv(
    criteria: QueryCriteria = Depends(get_criteria),
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    items = query(store.snapshot(), criteria)

    try:
        text = serialize(items, currency_symbol=settings.currency_symbol)
    except EmptyInputError:
        raise HTTPException(status_code=404, detail="No products to export")

    filename = export_filename(settings.export_prefix, utcnow().date())
    return StreamingResponse(
        io.BytesIO(text.encode("utf-8")),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, store: ProductStore = Depends(get_store)):
    try:
        p = store.get(product_id)
    except NotFoundError as e:
        raise _not_found(e)
    return ProductOut.from_product(p, utcnow())


@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, store: ProductStore = Depends(get_store)):
    try:
        p = store.add(ProductDraft(**payload.model_dump()))
    except ValidationError as e:
        raise _bad_request(e)
    return ProductOut.from_product(p, utcnow())


@router.patch("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    store: ProductStore = Depends(get_store),
):
    patch = ProductPatch(**payload.model_dump(exclude_unset=True))
    try:
        p = store.update(product_id, patch)
    except NotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise _bad_request(e)
    return ProductOut.from_product(p, utcnow())


@router.post("/products/{product_id}/toggle-active", response_model=ProductOut)
def toggle_product_active(product_id: int, store: ProductStore = Depends(get_store)):
    try:
        p = store.toggle_active(product_id)
    except NotFoundError as e:
        raise _not_found(e)
    return ProductOut.from_product(p, utcnow())


# ---------- STATS ----------


@router.get("/stats", response_model=InventoryStats)
def inventory_stats(store: ProductStore = Depends(get_store)):
    # whole inventory, independent of any active filter
    return aggregate(store.snapshot())


# ---------- AI ASSIST ----------


@router.post("/ai/description", response_model=DescriptionOut)
async def generate_description(
    payload: DescriptionIn,
    client: InsightsClient = Depends(get_insights_client),
):
    text = await client.generate_product_description(payload.name, payload.category)
    return DescriptionOut(description=text)


@router.post("/ai/insights", response_model=InsightsOut)
async def inventory_insights(
    store: ProductStore = Depends(get_store),
    client: InsightsClient = Depends(get_insights_client),
):
    html = await client.analyze_inventory_health(store.snapshot())
    return InsightsOut(html=html)
