from sqlalchemy.orm import Session
from sqlalchemy import select, func

from storefront.data.models.review import ReviewModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user_review(self, user_id: int, product_id: int) -> ReviewModel | None:
        return self.db.execute(
            select(ReviewModel).where(
                ReviewModel.user_id == user_id,
                ReviewModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.flush()
        return review

    def rating_stats(self, product_id: int) -> tuple[float, int]:
        avg, count = self.db.execute(
            select(func.avg(ReviewModel.rating), func.count(ReviewModel.id)).where(
                ReviewModel.product_id == product_id
            )
        ).one()
        return float(avg or 0.0), count

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
