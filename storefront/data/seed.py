# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import UserModel, ProductModel

PRODUCTS = [
    {
        "name": "Wireless Bluetooth Headphones",
        "description": "Premium noise-cancelling headphones with 30-hour battery life",
        "price": Decimal("89.99"),
        "original_price": Decimal("129.99"),
        "category": "Electronics",
        "brand": "Sony",
        "stock": 50,
        "rating": 4.5,
        "review_count": 234,
        "featured": True,
    },
    {
        "name": "Smart Watch Pro",
        "description": "Track your fitness and stay connected with this advanced smartwatch",
        "price": Decimal("299.99"),
        "category": "Electronics",
        "brand": "Apple",
        "stock": 30,
        "rating": 4.8,
        "review_count": 567,
        "featured": True,
    },
    {
        "name": "Running Shoes",
        "description": "Lightweight and comfortable running shoes for all terrains",
        "price": Decimal("79.99"),
        "original_price": Decimal("99.99"),
        "category": "Sports",
        "brand": "Nike",
        "stock": 100,
        "rating": 4.3,
        "review_count": 189,
        "featured": True,
    },
    {
        "name": "Ceramic Coffee Mug",
        "description": "Stoneware mug, 350 ml, dishwasher safe",
        "price": Decimal("12.50"),
        "category": "Home",
        "brand": "Hearth",
        "stock": 200,
    },
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # only seed an empty catalog
        if db.query(ProductModel).first():
            return
        db.add(UserModel(id=1, name="Demo User", email="demo@example.com"))
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    seed()
