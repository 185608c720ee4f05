# tests/conftest.py
import os

#przed importem storefront - settings czytane przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["SEED_ON_STARTUP"] = "0"

from decimal import Decimal

import pytest

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models.product import ProductModel
import storefront.data.models  # noqa: F401


class FakeLockService:
    """Zamiast redisa - ten sam kontrakt acquire/release."""

    def __init__(self):
        self.held = {}

    def acquire_checkout_lock(self, user_id: int, ttl: int):
        if user_id in self.held:
            return None
        token = f"token-{user_id}"
        self.held[user_id] = token
        return token

    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        if self.held.get(user_id) == token:
            del self.held[user_id]
            return True
        return False


ADDRESS = {
    "full_name": "Jan Kowalski",
    "email": "jan.kowalski@poczta.pl",
    "phone": "+48123456789",
    "street": "Dluga 1",
    "city": "Krakow",
    "state": "Malopolskie",
    "zip_code": "30-001",
    "country": "PL",
}


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def make_product():
    def _make(name="Widget", price="10.00", stock=10, is_active=True) -> int:
        session = SessionLocal()
        try:
            product = ProductModel(name=name, price=Decimal(price), stock=stock, is_active=is_active)
            session.add(product)
            session.commit()
            return product.id
        finally:
            session.close()

    return _make


@pytest.fixture
def address():
    return dict(ADDRESS)
