from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, JSON
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from checkout_service.data.database import Base

PENDING = "pending"


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # snapshot of the delivery address as submitted at checkout
    address = Column(JSON, nullable=False)
    payment_method = Column(String(50), nullable=False)

    status = Column(String, nullable=False, default=PENDING)
    payment_status = Column(String, nullable=False, default=PENDING)
    fulfillment_status = Column(String, nullable=False, default=PENDING)

    total = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    lines = relationship(
        "OrderLineModel",
        back_populates="order",
        order_by="OrderLineModel.id",
    )


class OrderLineModel(Base):
    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="lines")
