# checkout_service/services/cart_service.py
from sqlalchemy.orm import Session

from checkout_service.repos.cart_repo import CartRepo
from checkout_service.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart lifecycle as seen from checkout.

    Only touches carts that belong to the buyer: reads the open one, flags its
    abandoned-cart record as recovered and, once the order is committed,
    converts it. Transitions are open->converted and unrecovered->recovered,
    so repeating any call is harmless. Callers treat every method as best-effort.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    def find_open_cart_id(self, user_id: int) -> int | None:
        cart = self.repo.get_open_cart_by_user(user_id)
        return cart.id if cart else None

    def mark_recovered(self, cart_id: int) -> int:
        rowcount = self.repo.mark_abandoned_recovered(cart_id)
        if rowcount:
            logger.info(f"Abandoned cart record for cart {cart_id} marked as recovered")
        return rowcount

    def convert_open_carts(self, user_id: int) -> int:
        """Runs in its own transaction, after the order has been committed."""
        try:
            rowcount = self.repo.convert_open_carts(user_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Converted {rowcount} open cart(s) for user {user_id}")
        return rowcount
