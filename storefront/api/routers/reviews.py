from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import ReviewIn, ReviewOut
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("/", response_model=ReviewOut, status_code=201)
def create_review(
    payload: ReviewIn,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return ReviewService(db).create_review(user_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
