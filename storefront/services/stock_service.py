# storefront/services/stock_service.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from storefront.domain.errors import (
    InsufficientStock,
    InvalidQuantity,
    ProductInactive,
    ProductNotFound,
)
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReservedLine:
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int


def merge_lines(lines: Iterable[Tuple[int, int]]) -> Dict[int, int]:
    """Te same produkty sumujemy, kolejnosc pierwszego wystapienia zostaje."""
    merged: Dict[int, int] = {}
    for product_id, quantity in lines:
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise InvalidQuantity(quantity)
        merged[product_id] = merged.get(product_id, 0) + quantity
    return merged


class StockService:
    """
    Rezerwacja stanu magazynowego.

    validate() - tylko odczyt, cale zamowienie albo nic
    reserve()  - warunkowy dekrement per produkt, pierwszy fail przerywa
    restore()  - zwrot na magazyn przy anulowaniu
    Commit/rollback robi wywolujacy, tu tylko operacje w jego transakcji.
    """

    def __init__(self, db: Session):
        self.products = ProductRepo(db)

    def validate(self, lines: Iterable[Tuple[int, int]]) -> List[ReservedLine]:
        requested = merge_lines(lines)
        products = self.products.get_many(requested.keys())

        reserved = []
        for product_id, quantity in requested.items():
            product = products.get(product_id)
            if product is None:
                raise ProductNotFound(product_id)

            if not product.is_active:
                raise ProductInactive(product_id, product.name)

            if product.stock < quantity:
                logger.warning(
                    f"Brak towaru {product_id}: dostepne {product.stock}, zadane {quantity}"
                )
                raise InsufficientStock(product_id, product.name, quantity, product.stock)

            reserved.append(
                ReservedLine(
                    product_id=product.id,
                    name=product.name,
                    unit_price=Decimal(product.price),
                    quantity=quantity,
                )
            )

        return reserved

    def reserve(self, lines: Iterable[ReservedLine]) -> None:
        for line in lines:
            if self.products.decrement_stock(line.product_id, line.quantity):
                continue

            #ktos nas wyprzedzil miedzy walidacja a dekrementem
            available = self.products.current_stock(line.product_id)
            logger.warning(
                f"Warunkowy dekrement nieudany dla produktu {line.product_id}, "
                f"zadane {line.quantity}, dostepne {available}"
            )
            if available is None:
                raise ProductNotFound(line.product_id)
            raise InsufficientStock(line.product_id, line.name, line.quantity, available)

    def restore(self, lines: Iterable[Tuple[int, int]]) -> None:
        for product_id, quantity in lines:
            if not self.products.increment_stock(product_id, quantity):
                logger.error(f"Nie mozna zwrocic {quantity} szt. produktu {product_id} na magazyn")
                raise ProductNotFound(product_id)
