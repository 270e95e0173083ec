# checkout_service/services/order_service.py
from typing import Any, Callable, Dict, Sequence

from sqlalchemy.orm import Session

from checkout_service.data.models.order import OrderModel, PENDING
from checkout_service.errors import (
    AuthError,
    CheckoutError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from checkout_service.repos.order_repo import OrderRepo
from checkout_service.services.cart_service import CartService
from checkout_service.services.coupon_service import CouponService
from checkout_service.services.inventory_service import InventoryService
from checkout_service.services.notification_service import NotificationService, ORDER_CREATED
from checkout_service.services.user_service import UserService
from checkout_service.utils.logging import get_logger
from checkout_service.utils.money import ZERO, round_money

logger = get_logger(__name__)


class OrderService:
    """
    Order-creation transaction.

    One checkout runs in one database transaction:
    profile update (best-effort) -> open cart lookup (best-effort) ->
    order header -> product lock -> lines + stock -> coupon -> total ->
    abandoned cart recovery (best-effort) -> commit.
    After the commit the "order created" event is fired and the open cart is
    converted, both best-effort.

    Anything that fails between the header insert and the total update rolls
    the whole transaction back and is raised as a CheckoutError.
    """

    def __init__(
        self,
        db: Session,
        notifier: NotificationService | None = None,
        user_service: UserService | None = None,
        cart_service: CartService | None = None,
        coupon_service: CouponService | None = None,
        inventory_service: InventoryService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.inventory_service = inventory_service or InventoryService(db)
        self.coupon_service = coupon_service or CouponService(db)
        self.cart_service = cart_service or CartService(db)
        self.user_service = user_service or UserService(db)
        self.notifier = notifier or NotificationService()

    # =====================================================
    # COMMAND
    # =====================================================
    def checkout(
        self,
        buyer_id: int,
        payment_method: str,
        address: dict,
        lines: Sequence,
        profile_fields: dict | None = None,
        coupon_code: str | None = None,
    ) -> Dict[str, Any]:
        """
        `lines` are objects exposing `product_id` and `quantity`, priced and
        validated in the order given.

        Returns {order_id, total, subtotal, discount, applied_coupon}.
        """
        if not buyer_id:
            raise AuthError()

        if not lines:
            raise ValidationError("products", "empty", "Checkout requires at least one product.")

        try:
            result = self._place_order(buyer_id, payment_method, address, lines, profile_fields, coupon_code)
            self.db.commit()
        except CheckoutError as e:
            logger.warning(f"[checkout] rejected for user {buyer_id}: {e.code} {e.message}")
            self._rollback()
            raise
        except Exception as exc:
            logger.exception(f"[checkout] unexpected failure for user {buyer_id}")
            self._rollback()
            raise InternalError() from exc

        logger.info(
            f"Order {result['order_id']} created for user {buyer_id}: "
            f"subtotal {result['subtotal']}, discount {result['discount']}, total {result['total']}"
        )

        self._after_commit(buyer_id, result["order_id"])
        return result

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        # someone else's order is reported exactly like a missing one
        if not order or order.user_id != user_id:
            raise NotFoundError("order", order_id)

        return {
            "id": order.id,
            "user_id": order.user_id,
            "address": order.address,
            "payment_method": order.payment_method,
            "status": order.status,
            "payment_status": order.payment_status,
            "fulfillment_status": order.fulfillment_status,
            "total": order.total,
            "created_at": order.created_at,
            "lines": [
                {
                    "product_id": line.product_id,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                    "subtotal": line.subtotal,
                }
                for line in order.lines
            ],
        }

    # =====================================================
    # TRANSACTION BODY
    # =====================================================
    def _place_order(self, buyer_id, payment_method, address, lines, profile_fields, coupon_code):
        # 1) profile update
        if profile_fields:
            self._best_effort("profile update", self.user_service.update_profile, buyer_id, profile_fields)

        # 2) open cart, only used for the recovery flag below
        open_cart_id = self._best_effort("open cart lookup", self.cart_service.find_open_cart_id, buyer_id)

        # 3) order header, total patched at the end
        order = self.repo.create_order(
            OrderModel(
                user_id=buyer_id,
                address=dict(address or {}),
                payment_method=payment_method,
                status=PENDING,
                payment_status=PENDING,
                fulfillment_status=PENDING,
                total=ZERO,
            )
        )
        order_id = order.id

        # 4) lock every product row of the request at once
        inventory = self.inventory_service.lock_products(
            line.product_id for line in lines if line.product_id
        )

        # 5 + 6) validate against the snapshot, write line, decrement stock
        subtotal = ZERO
        for index, line in enumerate(lines):
            field = f"products[{index}]"
            quantity = line.quantity

            if not line.product_id or not isinstance(quantity, int) or quantity <= 0:
                raise ValidationError(field, "invalid_line", "Invalid product line in checkout.")

            unit_price = inventory.reserve(line.product_id, quantity, field=field)
            self.repo.add_line(order_id, line.product_id, quantity, unit_price)
            subtotal += unit_price * quantity

        subtotal = round_money(subtotal)

        # 7 + 8) coupon
        discount = ZERO
        applied_coupon = None
        code = (coupon_code or "").strip()
        if code:
            applied = self.coupon_service.apply_coupon(code, subtotal)
            discount = applied["discount"]
            applied_coupon = applied["coupon"]

        total = round_money(subtotal - discount)

        # 9) final total
        self.repo.set_total(order_id, total)

        # 10) abandoned cart recovery
        if open_cart_id:
            self._best_effort("abandoned cart recovery", self.cart_service.mark_recovered, open_cart_id)

        return {
            "order_id": order_id,
            "total": total,
            "subtotal": subtotal,
            "discount": discount,
            "applied_coupon": applied_coupon,
        }

    def _after_commit(self, buyer_id: int, order_id: int) -> None:
        self._best_effort(
            "order notification", self.notifier.notify, ORDER_CREATED, order_id, savepoint=False
        )
        self._best_effort(
            "open cart conversion", self.cart_service.convert_open_carts, buyer_id, savepoint=False
        )

    def _best_effort(self, step: str, fn: Callable, *args, savepoint: bool = True):
        """
        Runs a step that must never fail the sale. Inside the transaction the
        step gets its own SAVEPOINT so a failed statement is undone without
        touching the order.
        """
        try:
            if savepoint:
                with self.db.begin_nested():
                    return fn(*args)
            return fn(*args)
        except Exception:
            logger.exception(f"[checkout] {step} failed, continuing")
            return None

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except Exception:
            logger.exception("[checkout] rollback failed")
