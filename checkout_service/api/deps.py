# checkout_service/api/deps.py
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from checkout_service.data.database import get_db
from checkout_service.errors import AuthError
from checkout_service.services.order_service import OrderService
from checkout_service.utils.settings import JWT_SECRET_KEY, JWT_ALGORITHM

bearer = HTTPBearer(auto_error=False)


def get_current_buyer_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> int:
    """Buyer id from the `sub` claim of the bearer token."""
    if credentials is None:
        raise AuthError()

    try:
        payload = jwt.decode(credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise AuthError("Invalid or expired session.") from e

    try:
        buyer_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthError("Invalid or expired session.")

    if buyer_id <= 0:
        raise AuthError("Invalid or expired session.")
    return buyer_id


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)
