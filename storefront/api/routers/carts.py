# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import CartOut, CartLineOut, ItemIn, QuantityIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=CartOut)
def get_cart(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return CartService(db).list_cart(user_id)


@router.post("/items", response_model=CartLineOut)
def add_item(
    payload: ItemIn,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        return svc.add(user_id, payload.product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/items/{line_id}", response_model=CartLineOut)
def set_quantity(
    line_id: int,
    payload: QuantityIn,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        return svc.set_quantity(user_id, line_id, payload.quantity)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/items/{line_id}")
def remove_item(
    line_id: int,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        svc.remove(user_id, line_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Item removed from cart"}


@router.delete("/")
def clear_cart(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    removed = CartService(db).clear(user_id)
    return {"removed": removed}
