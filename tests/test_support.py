"""Tests for profile normalization, cart tracking and the dev seed."""

from decimal import Decimal

from checkout_service.data.models import CartModel, CouponModel, ProductModel
from checkout_service.data.seed import PRODUCTS, seed
from checkout_service.services.cart_service import CartService
from checkout_service.services.user_service import normalize_profile_fields

from conftest import count


def test_normalize_profile_fields():
    fields = normalize_profile_fields(
        {"name": "  Ana ", "email": "", "phone": "(33) 9 8888-7777", "tax_id": "---", "ignored": "x"}
    )

    assert fields == {"name": "Ana", "phone": "33988887777"}


def test_normalize_profile_fields_none():
    assert normalize_profile_fields(None) == {}


def test_find_open_cart_picks_most_recent(db, buyer):
    db.add_all([
        CartModel(id=1, user_id=buyer.id, status="open"),
        CartModel(id=2, user_id=buyer.id, status="open"),
        CartModel(id=3, user_id=buyer.id, status="converted"),
    ])
    db.commit()

    assert CartService(db).find_open_cart_id(buyer.id) == 2


def test_find_open_cart_none(db, buyer):
    assert CartService(db).find_open_cart_id(buyer.id) is None


def test_convert_is_idempotent(db, open_cart):
    carts = CartService(db)

    assert carts.convert_open_carts(open_cart.user_id) == 1
    assert carts.convert_open_carts(open_cart.user_id) == 0
    assert db.get(CartModel, open_cart.id).status == "converted"


def test_mark_recovered_without_record(db, buyer):
    cart = CartModel(user_id=buyer.id, status="open")
    db.add(cart)
    db.commit()

    assert CartService(db).mark_recovered(cart.id) == 0


def test_seed_only_fills_empty_database(db):
    seed(db)
    seed(db)

    assert count(db, ProductModel) == 3
    assert count(db, CouponModel) == 2


def test_seed_leaves_product_ids_to_the_database(db):
    seed(db)

    assert all("id" not in product for product in PRODUCTS)
    product = ProductModel(name="Headset", price=Decimal("150.00"), quantity=5)
    db.add(product)
    db.commit()
    assert product.id == len(PRODUCTS) + 1
