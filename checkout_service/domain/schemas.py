# checkout_service/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal
from datetime import datetime

from checkout_service.utils.settings import PAYMENT_METHODS, QTY_MAX

# request/response bodies use camelCase on the wire
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckoutLineIn(BaseModel):
    """Schema for one requested product line."""

    model_config = _CAMEL

    product_id: int = Field(..., gt=0, alias="id", description="Product ID (must be > 0)")
    quantity: int = Field(..., gt=0, le=QTY_MAX, description=f"Quantity between 1 and {QTY_MAX}")


class AddressIn(BaseModel):
    """Delivery address. Extra keys are kept in the order snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    zip_code: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    complement: str | None = None


class ProfileFieldsIn(BaseModel):
    """Optional buyer fields refreshed during checkout."""

    model_config = _CAMEL

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    tax_id: str | None = None


class CheckoutIn(BaseModel):
    """Schema for POST /checkout. The buyer comes from the bearer token."""

    model_config = _CAMEL

    payment_method: str
    address: AddressIn
    products: List[CheckoutLineIn] = Field(..., min_length=1)
    coupon_code: str | None = None
    profile_fields: ProfileFieldsIn | None = None

    @field_validator("payment_method")
    @classmethod
    def _known_payment_method(cls, value: str) -> str:
        if value not in PAYMENT_METHODS:
            raise ValueError(f"must be one of: {', '.join(PAYMENT_METHODS)}")
        return value


class AppliedCouponOut(BaseModel):
    model_config = _CAMEL

    id: int
    code: str
    type: str
    value: Decimal


class CheckoutOut(BaseModel):
    """Schema for a successful checkout (response)."""

    model_config = _CAMEL

    success: bool = True
    order_id: int
    total: Decimal
    subtotal_before_discount: Decimal
    discount_total: Decimal
    applied_coupon: AppliedCouponOut | None = None


class OrderLineOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderOut(BaseModel):
    """Schema for an order (response)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: int
    address: dict
    payment_method: str
    status: str
    payment_status: str
    fulfillment_status: str
    total: Decimal
    created_at: datetime
    lines: List[OrderLineOut]
