from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric

from checkout_service.data.database import Base

PERCENTAGE = "percentage"
FIXED = "fixed"


class CouponModel(Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, nullable=False, index=True)

    # "percentage" or "fixed"
    type = Column(String(16), nullable=False)
    value = Column(Numeric(10, 2), nullable=False)

    # 0 disables the threshold
    minimum = Column(Numeric(10, 2), nullable=False, default=0)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    usage_count = Column(Integer, nullable=False, default=0)
    max_usage = Column(Integer, nullable=True)  # None = unlimited

    active = Column(Boolean, nullable=False, default=True)
