from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from storefront.data.models import ProductModel, UserModel
from storefront.data.seed import PRODUCTS, seed


def test_seed_fills_empty_catalog_once(engine):
    factory = sessionmaker(bind=engine)
    seed(factory)
    seed(factory)

    with factory() as session:
        assert session.scalar(select(func.count(ProductModel.id))) == len(PRODUCTS)
        assert session.get(UserModel, 1).name == "Demo User"
