# checkout_service/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from checkout_service.data.models.cart import CartModel, AbandonedCartModel, OPEN, CONVERTED


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_open_cart_by_user(self, user_id: int) -> CartModel | None:
        stmt = (
            select(CartModel)
            .where(CartModel.user_id == user_id, CartModel.status == OPEN)
            .order_by(CartModel.id.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def mark_abandoned_recovered(self, cart_id: int) -> int:
        result = self.db.execute(
            update(AbandonedCartModel)
            .where(AbandonedCartModel.cart_id == cart_id)
            .values(recovered=True, updated_at=datetime.now(timezone.utc))
        )
        return result.rowcount

    def convert_open_carts(self, user_id: int) -> int:
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.user_id == user_id, CartModel.status == OPEN)
            .values(status=CONVERTED)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
