# storefront/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import AddressIn, AddressOut, AddressPatch
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("/", response_model=List[AddressOut])
def list_addresses(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return AddressService(db).list_addresses(user_id)


@router.post("/", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressIn,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AddressService(db).create(user_id, payload)


@router.patch("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    payload: AddressPatch,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return AddressService(db).update(user_id, address_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{address_id}/default", response_model=AddressOut)
def set_default(
    address_id: int,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return AddressService(db).set_default(user_id, address_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{address_id}")
def delete_address(
    address_id: int,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        AddressService(db).delete(user_id, address_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"message": "Address deleted"}
