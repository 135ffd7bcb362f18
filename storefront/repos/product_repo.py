# storefront/repos/product_repo.py
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_

from storefront.data.models.product import ProductModel
from storefront.data.models.review import ReviewModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_price(self, product_id: int) -> Decimal | None:
        # always straight from the table, never cached
        return self.db.execute(
            select(ProductModel.price).where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def search(
        self,
        *,
        search: str = "",
        category: str = "",
        brand: str = "",
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        min_rating: float = 0.0,
        featured: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[ProductModel], int]:
        conditions = [ProductModel.rating >= min_rating]

        if min_price is not None:
            conditions.append(ProductModel.price >= min_price)
        if max_price is not None:
            conditions.append(ProductModel.price <= max_price)

        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(ProductModel.name).like(pattern),
                    func.lower(ProductModel.description).like(pattern),
                )
            )
        if category:
            conditions.append(ProductModel.category == category)
        if brand:
            conditions.append(ProductModel.brand == brand)
        if featured:
            conditions.append(ProductModel.featured.is_(True))

        total = self.db.execute(
            select(func.count()).select_from(ProductModel).where(*conditions)
        ).scalar_one()

        products = self.db.execute(
            select(ProductModel)
            .where(*conditions)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            .offset(offset)
            .limit(limit)
        ).scalars().all()

        return list(products), total

    def get_related(self, product: ProductModel, limit: int = 4) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.category == product.category, ProductModel.id != product.id)
                .limit(limit)
            ).scalars().all()
        )

    def get_reviews(self, product_id: int) -> list[ReviewModel]:
        return list(
            self.db.execute(
                select(ReviewModel)
                .where(ReviewModel.product_id == product_id)
                .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
            ).scalars().all()
        )
