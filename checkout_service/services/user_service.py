import re

from sqlalchemy.orm import Session

from checkout_service.repos.user_repo import UserRepo

_NON_DIGITS = re.compile(r"\D")


def _clean(value) -> str:
    return str(value).strip() if value is not None else ""


def normalize_profile_fields(fields: dict | None) -> dict:
    """Drops blank values; phone and tax id keep digits only."""
    fields = fields or {}
    out = {}

    for key in ("name", "email"):
        value = _clean(fields.get(key))
        if value:
            out[key] = value

    for key in ("phone", "tax_id"):
        digits = _NON_DIGITS.sub("", _clean(fields.get(key)))
        if digits:
            out[key] = digits

    return out


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def update_profile(self, user_id: int, fields: dict | None) -> int:
        return self.repo.update_fields(user_id, normalize_profile_fields(fields))
