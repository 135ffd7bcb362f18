from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from storefront.data.database import get_db
from storefront.services.user_service import UserService
from storefront.domain.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/", response_model=UserRead)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create_user(payload)

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
