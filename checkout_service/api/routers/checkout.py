# checkout_service/api/routers/checkout.py
from fastapi import APIRouter, Depends

from checkout_service.api.deps import get_current_buyer_id, get_order_service
from checkout_service.domain.schemas import CheckoutIn, CheckoutOut
from checkout_service.services.order_service import OrderService

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutOut, status_code=201)
def create_checkout(
    payload: CheckoutIn,
    buyer_id: int = Depends(get_current_buyer_id),
    svc: OrderService = Depends(get_order_service),
):
    """
    Creates the order, decrements stock and applies the coupon in one
    transaction. Failures come back as {success: false, code, message}.
    """
    result = svc.checkout(
        buyer_id=buyer_id,
        payment_method=payload.payment_method,
        address=payload.address.model_dump(by_alias=True, exclude_unset=True),
        lines=payload.products,
        profile_fields=payload.profile_fields.model_dump(exclude_none=True) if payload.profile_fields else None,
        coupon_code=payload.coupon_code,
    )
    return CheckoutOut(
        order_id=result["order_id"],
        total=result["total"],
        subtotal_before_discount=result["subtotal"],
        discount_total=result["discount"],
        applied_coupon=result["applied_coupon"],
    )
