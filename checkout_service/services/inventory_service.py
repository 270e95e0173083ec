# checkout_service/services/inventory_service.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable

from sqlalchemy.orm import Session

from checkout_service.errors import NotFoundError, ValidationError
from checkout_service.repos.product_repo import ProductRepo
from checkout_service.utils.logging import get_logger
from checkout_service.utils.money import D

logger = get_logger(__name__)


@dataclass
class ProductSnapshot:
    product_id: int
    price: Decimal
    stock: int


class LockedInventory:
    """
    Price/stock view of the product rows locked by InventoryService.lock_products.

    Stock can only be decremented through reserve(), which checks the request
    against this snapshot first. Reserved units are taken off the snapshot so a
    product listed twice in one checkout cannot be sold past its locked stock.
    """

    def __init__(self, repo: ProductRepo, snapshot: Dict[int, ProductSnapshot]):
        self.repo = repo
        self.snapshot = snapshot

    def __contains__(self, product_id: int) -> bool:
        return product_id in self.snapshot

    def get(self, product_id: int) -> ProductSnapshot | None:
        return self.snapshot.get(product_id)

    def reserve(self, product_id: int, quantity: int, field: str = "products") -> Decimal:
        item = self.snapshot.get(product_id)
        if item is None:
            raise NotFoundError("product", product_id)

        if item.stock < quantity:
            raise ValidationError(
                field=field,
                reason="insufficient_stock",
                message=f"Insufficient stock for product {product_id}.",
                product_id=product_id,
            )

        self.repo.decrement_stock(product_id, quantity)
        item.stock -= quantity
        return item.price


class InventoryService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def lock_products(self, product_ids: Iterable[int]) -> LockedInventory:
        """
        Locks every requested product row in one statement and returns the
        snapshot. The locks live until the surrounding transaction ends.
        """
        rows = self.repo.lock_rows(product_ids)
        snapshot = {
            row.id: ProductSnapshot(product_id=row.id, price=D(row.price), stock=int(row.quantity))
            for row in rows
        }
        logger.info(f"Locked {len(snapshot)} product rows: {sorted(snapshot)}")
        return LockedInventory(self.repo, snapshot)
