# storefront/api/routers/products.py
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import ProductPage, ProductDetail
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=ProductPage)
def list_products(
    search: str = "",
    category: str = "",
    brand: str = "",
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    min_rating: float = Query(0.0, ge=0),
    featured: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ProductService(db).search(
        search=search,
        category=category,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        featured=featured,
        page=page,
        limit=limit,
    )


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_detail(product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
