# backend/lumina/core/store.py

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from lumina.core.errors import NotFoundError, ValidationError
from lumina.models.product import PRODUCT_CATEGORIES, Product, ProductDraft, ProductPatch

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# fields a patch may clear by sending null
NULLABLE_FIELDS = {"batch_id", "barcode", "description", "expiry_date"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_fields(fields: dict) -> None:
    if "name" in fields and not (fields["name"] or "").strip():
        raise ValidationError("Product name is required")

    if "category" in fields and fields["category"] not in PRODUCT_CATEGORIES:
        raise ValidationError(f"Unknown category: {fields['category']!r}")

    for k, v in fields.items():
        if v is None and k not in NULLABLE_FIELDS:
            raise ValidationError(f"{k} cannot be null")


class ProductStore:
    """
    Authoritative in-memory product collection for one session.

    Products are immutable values; a mutation replaces the record at its
    position with an updated copy, so snapshots never change after the fact.
    Nothing is ever removed: archiving is the is_active flag.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or utcnow
        self._products: List[Product] = []
        self._index: Dict[int, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._products)

    def _next_id(self) -> int:
        if not self._products:
            return 1
        return max(p.id for p in self._products) + 1

    def _position(self, product_id: int) -> int:
        pos = self._index.get(product_id)
        if pos is None:
            raise NotFoundError(product_id)
        return pos

    def add(self, draft: ProductDraft) -> Product:
        fields = draft.model_dump()
        _check_fields(fields)
        fields["name"] = fields["name"].strip()

        with self._lock:
            now = self._clock()
            p = Product(id=self._next_id(), created_at=now, updated_at=now, **fields)
            self._index[p.id] = len(self._products)
            self._products.append(p)

        logger.info("product_create id=%s name=%r", p.id, p.name)
        return p

    def get(self, product_id: int) -> Product:
        return self._products[self._position(product_id)]

    def update(self, product_id: int, patch: ProductPatch) -> Product:
        changes = patch.model_dump(exclude_unset=True)
        _check_fields(changes)
        if "name" in changes:
            changes["name"] = changes["name"].strip()

        with self._lock:
            pos = self._position(product_id)
            current = self._products[pos]
            data = current.model_dump()
            data.update(changes)
            data["updated_at"] = self._clock()
            p = Product(**data)
            self._products[pos] = p

        logger.info("product_update id=%s fields=%s", p.id, sorted(changes))
        return p

    def toggle_active(self, product_id: int) -> Product:
        with self._lock:
            pos = self._position(product_id)
            current = self._products[pos]
            p = current.model_copy(
                update={"is_active": not current.is_active, "updated_at": self._clock()}
            )
            self._products[pos] = p

        logger.info("product_toggle_active id=%s is_active=%s", p.id, p.is_active)
        return p

    def snapshot(self) -> Tuple[Product, ...]:
        return tuple(self._products)
