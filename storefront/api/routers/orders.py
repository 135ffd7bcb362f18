# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_checkout_service
from storefront.data.database import get_db
from storefront.domain.errors import CheckoutInProgress, PaymentFailure
from storefront.domain.schemas import CheckoutIn, OrderOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/", response_model=List[OrderOut])
def list_orders(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return OrderService(db).list_orders(user_id)


@router.get("/{order_number}", response_model=OrderOut)
def get_order(
    order_number: str,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return OrderService(db).get_order(user_id, order_number)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: CheckoutIn,
    user_id: int = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Checkout: charges the server-priced cart, stores the order, empties the cart.
    """
    try:
        return svc.checkout(user_id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentFailure as e:
        raise HTTPException(status_code=402, detail=f"Payment failed: {e.reason}")
    except CheckoutInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RuntimeError:
        raise HTTPException(status_code=500, detail="Failed to create order")
