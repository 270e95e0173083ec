# checkout_service/data/seed.py
from decimal import Decimal

from checkout_service.data.database import Base, SessionLocal
from checkout_service.data.models import ProductModel, CouponModel
from checkout_service.data.models.coupon import PERCENTAGE, FIXED

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "quantity": 50},
    {"name": "Mouse", "price": Decimal("49.50"), "quantity": 120},
    {"name": "Monitor", "price": Decimal("899.00"), "quantity": 10},
]

COUPONS = [
    {"code": "WELCOME10", "type": PERCENTAGE, "value": Decimal("10"), "minimum": Decimal("0")},
    {"code": "MINUS50", "type": FIXED, "value": Decimal("50"), "minimum": Decimal("300"), "max_usage": 100},
]


def seed(db=None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        Base.metadata.create_all(bind=db.get_bind())

        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.add_all(CouponModel(**c) for c in COUPONS)
        db.commit()
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    seed()
