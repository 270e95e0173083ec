"""Pytest fixtures for checkout service tests."""

import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from decimal import Decimal

import jwt
import pytest
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from checkout_service.data.database import Base, build_engine
from checkout_service.data.models import (
    AbandonedCartModel,
    CartModel,
    CouponModel,
    ProductModel,
    UserModel,
)
from checkout_service.domain.schemas import CheckoutLineIn
from checkout_service.services.order_service import OrderService
from checkout_service.utils.settings import JWT_ALGORITHM, JWT_SECRET_KEY

ADDRESS = {
    "zip_code": "36940000",
    "street": "Rua das Flores",
    "number": "288",
    "district": "Centro",
    "city": "Manhuacu",
    "state": "MG",
}


class FakeNotifier:
    """Records events instead of enqueueing Celery tasks."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.events = []

    def notify(self, event_name, order_id):
        if self.fail:
            raise RuntimeError("broker unavailable")
        self.events.append((event_name, order_id))


def line(product_id, quantity):
    return CheckoutLineIn(product_id=product_id, quantity=quantity)


def token_for(user_id) -> str:
    return jwt.encode({"sub": str(user_id)}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def count(db, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def stock_of(db, product_id) -> int:
    return db.execute(select(ProductModel.quantity).where(ProductModel.id == product_id)).scalar_one()


def usage_of(db, coupon_id) -> int:
    return db.execute(select(CouponModel.usage_count).where(CouponModel.id == coupon_id)).scalar_one()


def postgres_sql(stmt) -> str:
    """Renders a statement the way PostgreSQL receives it. SQLite drops FOR UPDATE."""
    return str(stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def buyer(db):
    user = UserModel(id=1, name="Ana", email="ana@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def add_product(db):
    def _add(product_id, price, quantity, name=None):
        product = ProductModel(
            id=product_id,
            name=name or f"Product {product_id}",
            price=Decimal(str(price)),
            quantity=quantity,
        )
        db.add(product)
        db.commit()
        return product

    return _add


@pytest.fixture
def add_coupon(db):
    def _add(code, type="percentage", value="10", **kwargs):
        coupon = CouponModel(code=code, type=type, value=Decimal(str(value)), **kwargs)
        db.add(coupon)
        db.commit()
        return coupon

    return _add


@pytest.fixture
def open_cart(db, buyer):
    """An open cart for the buyer with an unrecovered abandoned-cart record."""
    cart = CartModel(user_id=buyer.id, status="open")
    db.add(cart)
    db.flush()
    db.add(AbandonedCartModel(cart_id=cart.id, user_id=buyer.id, recovered=False))
    db.commit()
    return cart


@pytest.fixture
def catalog(add_product):
    """Scenario A catalog: product 1 at 10.50, product 2 at 20.00."""
    add_product(1, "10.50", 10)
    add_product(2, "20.00", 5)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def service(db, notifier):
    return OrderService(db, notifier=notifier)


@pytest.fixture
def executed(db, monkeypatch):
    """Statements passed to db.execute, in order."""
    statements = []
    execute = db.execute

    def _record(stmt, *args, **kwargs):
        statements.append(stmt)
        return execute(stmt, *args, **kwargs)

    monkeypatch.setattr(db, "execute", _record)
    return statements
