from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from checkout_service.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),)

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    # stock on hand
    quantity = Column(Integer, nullable=False, default=0)
