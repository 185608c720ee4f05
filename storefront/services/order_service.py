# storefront/services/order_service.py
import math
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import AccessDenied, InvalidStatusTransition, OrderNotFound
from storefront.domain.status import (
    OrderStatus,
    ensure_admin_transition,
    ensure_cancellable,
)
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.services.stock_service import StockService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za cykl zycia zamowienia po checkoucie.

    Zmiana statusu to compare-and-set na poprzednim statusie,
    anulowanie zwraca towar w tej samej transakcji co zmiana statusu.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.stock = StockService(db)
        self.notification_service = NotificationService()

    def _load(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    def get_order(self, order_id: int, user_id: int, is_admin: bool = False) -> OrderModel:
        """
        Use Case: Pobranie zamowienia (Query).
        """
        order = self._load(order_id)

        if not is_admin and order.user_id != user_id:
            raise AccessDenied("order", order_id)

        return order

    def list_orders(
        self,
        user_id: int,
        is_admin: bool = False,
        status: OrderStatus | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """
        Use Case: Historia zamowien (Query). Admin widzi wszystkie.
        """
        page = max(page, 1)
        limit = max(limit, 1)

        orders, total = self.repo.list_orders(
            user_id=None if is_admin else user_id,
            status=status,
            offset=(page - 1) * limit,
            limit=limit,
        )
        pages = math.ceil(total / limit) if total else 0

        return {
            "data": orders,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": pages,
                "has_next": page < pages,
                "has_prev": page > 1,
            },
        }

    def cancel(self, order_id: int, user_id: int, is_admin: bool = False) -> OrderModel:
        """
        Use Case: Anulowanie zamowienia przez wlasciciela (albo admina).
        Tylko z pending/confirmed, towar wraca na magazyn.
        """
        order = self.get_order(order_id, user_id, is_admin=is_admin)
        ensure_cancellable(order.status)
        return self._change_status(order, OrderStatus.CANCELLED)

    def update_status(self, order_id: int, status: OrderStatus) -> OrderModel:
        """
        Use Case: Admin ustawia status recznie (rola sprawdzona wyzej).
        """
        order = self._load(order_id)
        ensure_admin_transition(order.status, status)
        return self._change_status(order, OrderStatus(status))

    def _change_status(self, order: OrderModel, new_status: OrderStatus) -> OrderModel:
        old_status = OrderStatus(order.status)
        restock = [(i.product_id, i.quantity) for i in order.items]

        try:
            # update orders set status = new where id = ? and status = old
            rowcount = self.repo.update_status(order.id, old_status, new_status)
            if rowcount == 0:
                self.repo.rollback()
                current = OrderStatus(self.repo.refresh(order).status)
                logger.warning(
                    f"Zamowienie {order.id} zmienione w miedzyczasie: {old_status.value} -> {current.value}"
                )
                raise InvalidStatusTransition(current.value, new_status.value)

            if new_status == OrderStatus.CANCELLED:
                self.stock.restore(restock)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Zamowienie {order.order_number}: {old_status.value} -> {new_status.value}")
        self.notification_service.status_changed(order.user_id, order.order_number, new_status.value)

        return self.repo.refresh(order)
