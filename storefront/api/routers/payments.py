# storefront/api/routers/payments.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_current_user, get_checkout_service
from storefront.domain.errors import PaymentFailure
from storefront.domain.schemas import PaymentIntentOut, PricingOut
from storefront.services.checkout_service import CheckoutService

router = APIRouter(tags=["payments"])


@router.get("/checkout/preview", response_model=PricingOut)
def preview(
    user_id: int = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
):
    try:
        return svc.preview(user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/payments/intent", response_model=PaymentIntentOut)
def create_payment_intent(
    user_id: int = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Intent for client-side confirmation. The amount is the server-priced
    cart total, the client cannot supply one.
    """
    try:
        intent = svc.create_payment_intent(user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentFailure as e:
        raise HTTPException(status_code=402, detail=f"Payment failed: {e.reason}")
    return PaymentIntentOut(client_secret=intent.client_secret, amount=intent.amount, currency=intent.currency)
