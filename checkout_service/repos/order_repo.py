# checkout_service/repos/order_repo.py
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.orm import Session

from checkout_service.data.models.order import OrderModel, OrderLineModel


class OrderRepo:
    """
    Writes never commit; the checkout transaction owns commit/rollback.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_line(self, order_id: int, product_id: int, quantity: int, unit_price: Decimal) -> OrderLineModel:
        line = OrderLineModel(
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=unit_price * quantity,
        )
        self.db.add(line)
        self.db.flush()
        return line

    def set_total(self, order_id: int, total: Decimal) -> None:
        self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(total=total)
        )

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)
