from sqlalchemy import update
from sqlalchemy.orm import Session

from checkout_service.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def update_fields(self, user_id: int, fields: dict) -> int:
        if not fields:
            return 0
        result = self.db.execute(
            update(UserModel).where(UserModel.id == user_id).values(**fields)
        )
        return result.rowcount
