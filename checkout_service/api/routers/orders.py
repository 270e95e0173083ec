# checkout_service/api/routers/orders.py
from fastapi import APIRouter, Depends

from checkout_service.api.deps import get_current_buyer_id, get_order_service
from checkout_service.domain.schemas import OrderOut
from checkout_service.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    buyer_id: int = Depends(get_current_buyer_id),
    svc: OrderService = Depends(get_order_service),
):
    """
    Order details with the prices captured at checkout.
    """
    return svc.get_order(order_id, buyer_id)
