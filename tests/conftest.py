import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PAYMENT_GATEWAY", "fake")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api import create_app
from storefront.api.deps import get_checkout_service, get_lock_service
from storefront.data.database import Base, get_db
from storefront.data.models import UserModel, ProductModel, AddressModel
from storefront.services.checkout_service import CheckoutService
from storefront.services.payment_client import FakeGateway, set_gateway


class FakeLockService:
    """In-memory stand-in for the redis checkout lock."""

    def __init__(self):
        self.locks: dict[int, str] = {}
        self.released: list[int] = []

    def acquire_checkout_lock(self, user_id: int, token: str, ttl: int) -> bool:
        if user_id in self.locks:
            return False
        self.locks[user_id] = token
        return True

    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        if self.locks.get(user_id) != token:
            return False
        del self.locks[user_id]
        self.released.append(user_id)
        return True


class FakeNotificationService:
    def __init__(self):
        self.orders: list[tuple[int, str]] = []
        self.unreconciled: list[tuple[int, str, int, str]] = []

    def send_order_notification(self, user_id: int, order_number: str):
        self.orders.append((user_id, order_number))

    def report_unreconciled_capture(self, user_id: int, reference: str, amount_minor: int, currency: str):
        self.unreconciled.append((user_id, reference, amount_minor, currency))


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user(db):
    u = UserModel(id=1, name="Demo User", email="demo@example.com")
    db.add(u)
    db.add(UserModel(id=2, name="Other User", email="other@example.com"))
    db.commit()
    return u


@pytest.fixture()
def products(db):
    items = {
        "mug": ProductModel(
            name="Ceramic Mug", description="Stoneware mug", price=Decimal("20.00"),
            category="Home", brand="Hearth", stock=10,
        ),
        "lamp": ProductModel(
            name="Desk Lamp", description="LED desk lamp", price=Decimal("30.00"),
            category="Home", brand="Lumo", stock=5, featured=True,
        ),
        "shoes": ProductModel(
            name="Running Shoes", description="Lightweight trail shoes", price=Decimal("79.99"),
            category="Sports", brand="Nike", stock=3, rating=4.3,
        ),
    }
    db.add_all(items.values())
    db.commit()
    return items


@pytest.fixture()
def address(db, user):
    a = AddressModel(
        user_id=user.id, full_name="Demo User", street="1 Main St", city="Springfield",
        state="IL", zip_code="62701", country="US", phone="555-0100", is_default=True,
    )
    db.add(a)
    db.commit()
    return a


@pytest.fixture()
def gateway():
    gw = FakeGateway()
    set_gateway(gw)
    yield gw
    set_gateway(None)


@pytest.fixture()
def lock_service():
    return FakeLockService()


@pytest.fixture()
def notifications():
    return FakeNotificationService()


@pytest.fixture()
def checkout_service(db, gateway, lock_service, notifications):
    return CheckoutService(
        db=db,
        gateway=gateway,
        lock_service=lock_service,
        notification_service=notifications,
    )


@pytest.fixture()
def client(db, checkout_service, lock_service):
    app = create_app()

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_checkout_service] = lambda: checkout_service
    return TestClient(app)


@pytest.fixture()
def auth():
    return {"X-User-Id": "1"}
