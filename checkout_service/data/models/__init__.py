# import every model so SQLAlchemy registers it in Base.metadata

from checkout_service.data.models.user import UserModel
from checkout_service.data.models.product import ProductModel
from checkout_service.data.models.order import OrderModel, OrderLineModel
from checkout_service.data.models.coupon import CouponModel
from checkout_service.data.models.cart import CartModel, AbandonedCartModel

__all__ = [
    "UserModel",
    "ProductModel",
    "OrderModel",
    "OrderLineModel",
    "CouponModel",
    "CartModel",
    "AbandonedCartModel",
]
