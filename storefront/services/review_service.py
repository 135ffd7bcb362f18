# storefront/services/review_service.py
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel
from storefront.domain.errors import Conflict, NotFound
from storefront.domain.schemas import ReviewIn
from storefront.repos.product_repo import ProductRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)

    def create_review(self, user_id: int, payload: ReviewIn) -> ReviewModel:
        """
        One review per (user, product). The product's rating and review_count
        are recomputed from all its reviews in the same transaction.
        """
        product = self.products.get_product(payload.product_id)
        if not product:
            raise NotFound("Product not found")

        if self.repo.get_user_review(user_id, payload.product_id):
            raise Conflict("You have already reviewed this product")

        review = self.repo.add_review(
            ReviewModel(
                user_id=user_id,
                product_id=payload.product_id,
                rating=payload.rating,
                title=payload.title,
                comment=payload.comment,
            )
        )

        avg, count = self.repo.rating_stats(payload.product_id)
        product.rating = avg
        product.review_count = count

        self.repo.commit()
        logger.info(f"Review {review.id} added for product {product.id}, rating now {avg:.2f} ({count})")
        return review
