# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "stock": 25},
    {"name": "Mouse", "price": Decimal("49.50"), "stock": 100},
    {"name": "Monitor", "price": Decimal("899.00"), "stock": 10},
    {"name": "USB-C Cable", "price": Decimal("12.00"), "stock": 0},
]


def seed(session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        # tylko pusta tabela, niczego nie nadpisujemy
        if db.query(ProductModel).first():
            return 0
        db.add_all(ProductModel(is_active=True, **p) for p in PRODUCTS)
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products")
        return len(PRODUCTS)
    finally:
        db.close()


if __name__ == "__main__":
    from storefront.main import init_db

    init_db()
    seed()
