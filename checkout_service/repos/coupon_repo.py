# checkout_service/repos/coupon_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from checkout_service.data.models.coupon import CouponModel


class CouponRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_code_for_update(self, code: str) -> CouponModel | None:
        stmt = (
            select(CouponModel)
            .where(CouponModel.code == code)
            .limit(1)
            .with_for_update()
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def increment_usage(self, coupon_id: int) -> None:
        self.db.execute(
            update(CouponModel)
            .where(CouponModel.id == coupon_id)
            .values(usage_count=CouponModel.usage_count + 1)
        )
