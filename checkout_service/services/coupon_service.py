# checkout_service/services/coupon_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict

from sqlalchemy.orm import Session

from checkout_service.data.models.coupon import CouponModel, PERCENTAGE
from checkout_service.errors import ValidationError
from checkout_service.repos.coupon_repo import CouponRepo
from checkout_service.utils.logging import get_logger
from checkout_service.utils.money import D, ZERO, round_money

logger = get_logger(__name__)

COUPON_FIELD = "couponCode"


def compute_discount(coupon_type: str, value, subtotal) -> Decimal:
    """
    percentage -> subtotal * value / 100, anything else is a fixed amount.
    The result is clamped to [0, subtotal].
    """
    subtotal = D(subtotal)
    value = D(value)

    if coupon_type == PERCENTAGE:
        discount = round_money(subtotal * value / Decimal("100"))
    else:
        discount = round_money(value)

    if discount < 0:
        discount = ZERO
    if discount > subtotal:
        discount = round_money(subtotal)
    return discount


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CouponService:
    def __init__(self, db: Session, clock: Callable[[], datetime] | None = None):
        self.repo = CouponRepo(db)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def apply_coupon(self, code: str, subtotal) -> Dict[str, Any]:
        """
        Resolves the coupon under a row lock, validates it against the
        pre-discount subtotal and counts one use.

        Returns {"discount": Decimal, "coupon": {id, code, type, value}}.
        """
        subtotal = D(subtotal)
        coupon = self.repo.get_by_code_for_update(code)
        self.validate(coupon, subtotal)

        discount = compute_discount(coupon.type, coupon.value, subtotal)
        self.repo.increment_usage(coupon.id)

        logger.info(f"Coupon {coupon.code} applied: discount {discount} on subtotal {subtotal}")

        return {
            "discount": discount,
            "coupon": {
                "id": coupon.id,
                "code": coupon.code,
                "type": coupon.type,
                "value": D(coupon.value),
            },
        }

    def validate(self, coupon: CouponModel | None, subtotal: Decimal) -> None:
        # first failing rule wins
        if coupon is None:
            raise ValidationError(COUPON_FIELD, "coupon_not_found", "Invalid or unknown coupon.")

        if not coupon.active:
            raise ValidationError(COUPON_FIELD, "coupon_inactive", "This coupon is inactive.")

        if coupon.expires_at is not None and _as_utc(coupon.expires_at) < self.clock():
            raise ValidationError(COUPON_FIELD, "coupon_expired", "This coupon has expired.")

        usage = int(coupon.usage_count or 0)
        if coupon.max_usage is not None and usage >= int(coupon.max_usage):
            raise ValidationError(
                COUPON_FIELD, "coupon_usage_limit", "This coupon has reached its usage limit."
            )

        minimum = D(coupon.minimum)
        if minimum > 0 and subtotal < minimum:
            raise ValidationError(
                COUPON_FIELD,
                "coupon_minimum_not_met",
                f"This coupon requires a minimum order of {round_money(minimum)}.",
            )
