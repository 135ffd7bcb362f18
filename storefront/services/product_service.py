# storefront/services/product_service.py
import math
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.domain.errors import NotFound
from storefront.repos.product_repo import ProductRepo


class ProductService:
    """Catalog queries. Read only."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def search(
        self,
        search: str = "",
        category: str = "",
        brand: str = "",
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        min_rating: float = 0.0,
        featured: bool = False,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        products, total = self.repo.search(
            search=search,
            category=category,
            brand=brand,
            min_price=min_price,
            max_price=max_price,
            min_rating=min_rating,
            featured=featured,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return {
            "products": products,
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit),
        }

    def get_detail(self, product_id: int) -> dict:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        return {
            **{c.name: getattr(product, c.name) for c in product.__table__.columns},
            "reviews": self.repo.get_reviews(product_id),
            "related_products": self.repo.get_related(product),
        }

    def get_price(self, product_id: int) -> Decimal:
        price = self.repo.get_price(product_id)
        if price is None:
            raise NotFound("Product not found")
        return price
