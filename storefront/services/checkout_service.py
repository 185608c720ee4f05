# storefront/services/checkout_service.py
import random
import time
from typing import Any, Dict, Iterable, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import CheckoutInProgress, EmptyCheckout
from storefront.domain.pricing import PriceBreakdown, calculate_totals
from storefront.domain.status import OrderStatus, PaymentMethod, PaymentStatus
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.stock_service import ReservedLine, StockService
from storefront.utils.retry import order_number_retry
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def generate_order_number() -> str:
    # ORD-<epoch ms>-<4 cyfry>, unikalnosc pilnuje unique index
    timestamp = int(time.time() * 1000)
    return f"ORD-{timestamp}-{random.randint(0, 9999):04d}"


class CheckoutService:
    """
    Koszyk -> zamowienie w jednej operacji.

    1. walidacja wszystkich pozycji (bez zadnych zmian w bazie)
    2. snapshot cen + podsumowanie
    3. insert zamowienia (nowy numer przy kolizji)
    4. warunkowy dekrement stanow
    5. czyszczenie koszyka
    Kroki 3-5 w jednej transakcji, dowolny blad = rollback calosci.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.db = db
        self.orders = OrderRepo(db)
        self.carts = CartRepo(db)
        self.stock = StockService(db)
        self.lock_service = lock_service
        self.notification_service = NotificationService()

    def checkout(
        self,
        user_id: int,
        items: Iterable[Tuple[int, int]] | None,
        shipping_address: Dict[str, Any],
        billing_address: Dict[str, Any],
        payment_method: PaymentMethod,
    ) -> OrderModel:
        token = self.lock_service.acquire_checkout_lock(user_id, ttl=CHECKOUT_LOCK_TTL_SECONDS)
        if not token:
            logger.warning(f"Checkout uzytkownika {user_id} juz trwa")
            raise CheckoutInProgress(user_id)

        try:
            return self._checkout(user_id, items, shipping_address, billing_address, payment_method)
        finally:
            self.lock_service.release_checkout_lock(user_id, token)

    def _checkout(self, user_id, items, shipping_address, billing_address, payment_method) -> OrderModel:
        lines = list(items or [])
        if not lines:
            lines = self._cart_lines(user_id)
        if not lines:
            raise EmptyCheckout()

        # 1. walidacja calego zamowienia, nic jeszcze nie zmieniamy
        reserved = self.stock.validate(lines)

        # 2. ceny z katalogu w tej chwili
        totals = calculate_totals((l.unit_price, l.quantity) for l in reserved)

        try:
            # 3. zamowienie
            order = self._persist_order(
                user_id, reserved, totals, shipping_address, billing_address, payment_method
            )

            # 4. stany magazynowe
            self.stock.reserve(reserved)

            # 5. koszyk
            cart = self.carts.get_by_user(user_id)
            if cart:
                self.carts.clear_items(cart.id)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Zamowienie {order.order_number} utworzone dla uzytkownika {user_id}, "
            f"pozycji: {len(reserved)}, suma {totals.total}"
        )
        self.notification_service.order_placed(user_id, order.order_number)

        return self.orders.refresh(order)

    def _cart_lines(self, user_id: int) -> List[Tuple[int, int]]:
        cart = self.carts.get_by_user(user_id)
        if not cart:
            return []
        return [(i.product_id, i.quantity) for i in self.carts.get_items(cart.id)]

    @order_number_retry()
    def _persist_order(
        self,
        user_id: int,
        reserved: List[ReservedLine],
        totals: PriceBreakdown,
        shipping_address: Dict[str, Any],
        billing_address: Dict[str, Any],
        payment_method: PaymentMethod,
    ) -> OrderModel:
        order = OrderModel(
            user_id=user_id,
            order_number=generate_order_number(),
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping_charges=totals.shipping_charges,
            total_amount=totals.total,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            payment_method=PaymentMethod(payment_method).value,
            is_paid=False,
            shipping_address=dict(shipping_address),
            billing_address=dict(billing_address),
            items=[
                OrderItemModel(
                    product_id=l.product_id,
                    product_name=l.name,
                    quantity=l.quantity,
                    price=l.unit_price,
                )
                for l in reserved
            ],
        )

        try:
            return self.orders.add_order(order)
        except IntegrityError:
            #insert zamowienia to pierwszy zapis, rollback niczego innego nie cofa
            self.db.rollback()
            logger.warning(f"Kolizja numeru zamowienia {order.order_number}, losuje nowy")
            raise

    def get_confirmation(self, order_id: int, user_id: int, is_admin: bool = False) -> OrderModel:
        return OrderService(self.db).get_order(order_id, user_id, is_admin=is_admin)
