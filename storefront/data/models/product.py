from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Numeric, Float, Boolean, DateTime, JSON

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")

    price = Column(Numeric(10, 2), nullable=False)
    original_price = Column(Numeric(10, 2), nullable=True)

    category = Column(String, nullable=False, index=True)
    brand = Column(String, nullable=True, index=True)
    images = Column(JSON, nullable=False, default=list)

    # advisory only, nothing is reserved at checkout
    stock = Column(Integer, nullable=False, default=0)

    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)
    featured = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
