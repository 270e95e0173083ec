# checkout_service/repos/product_repo.py
from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from checkout_service.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def lock_rows(self, product_ids: Iterable[int]):
        """
        SELECT id, price, quantity ... FOR UPDATE over the whole id set in one
        statement. Rows come back in id order so every checkout locks in the same order.
        """
        ids = sorted(set(product_ids))
        if not ids:
            return []
        stmt = (
            select(ProductModel.id, ProductModel.price, ProductModel.quantity)
            .where(ProductModel.id.in_(ids))
            .order_by(ProductModel.id)
            .with_for_update()
        )
        return self.db.execute(stmt).all()

    def decrement_stock(self, product_id: int, quantity: int) -> None:
        self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(quantity=ProductModel.quantity - quantity)
        )
