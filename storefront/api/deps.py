# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import Unauthorized
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.payment_client import get_gateway
from storefront.services.user_service import UserService


def get_current_user(
    x_user_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> int:
    """
    Authenticated principal. Session handling lives in front of this service,
    which forwards the caller's id in X-User-Id.
    """
    try:
        return UserService(db).authenticate(x_user_id)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))


def get_lock_service() -> LockService:
    return LockService()


def get_checkout_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CheckoutService:
    return CheckoutService(
        db=db,
        gateway=get_gateway(),
        lock_service=lock_service,
    )
