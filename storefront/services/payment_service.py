# storefront/services/payment_service.py
import re
import secrets
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.domain.errors import AlreadyPaid, InvalidPaymentDetails, InvalidStatusTransition
from storefront.domain.status import (
    OrderStatus,
    PaymentStatus,
    ensure_payment_transition,
    status_after_payment,
)
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.utils.settings import MOCK_DECLINED_CARDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
_CVV_RE = re.compile(r"^\d{3,4}$")

#ile razy ponawiamy zapis gdy status zamowienia zmienil sie pod nami
_WRITE_ATTEMPTS = 3


def mock_gateway_id(prefix: str) -> str:
    return f"{prefix}_{secrets.token_hex(7)}"


def normalize_card_number(card_number: str | None) -> str:
    return re.sub(r"[\s-]", "", card_number or "")


def validate_card(card: Dict[str, Any]) -> str:
    """Powierzchowna walidacja jak w bramce testowej, zwraca znormalizowany numer."""
    number = normalize_card_number(card.get("card_number"))
    if not number.isdigit() or not 13 <= len(number) <= 19:
        raise InvalidPaymentDetails("card_number")

    expiry = card.get("expiry_date")
    if expiry is not None and not _EXPIRY_RE.match(expiry):
        raise InvalidPaymentDetails("expiry_date")

    cvv = card.get("cvv")
    if cvv is not None and not _CVV_RE.match(cvv):
        raise InvalidPaymentDetails("cvv")

    return number


class PaymentService:
    """
    Symulacja bramki platnosci, synchronicznie.

    Kontrakt dla prawdziwej integracji: platnosc idempotentna,
    tylko dla wlasciciela zamowienia, i atomowo razem z potwierdzeniem zamowienia.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.orders = OrderService(db)
        self.notification_service = NotificationService()

    def pay(self, order_id: int, user_id: int, card_details: Dict[str, Any]) -> Dict[str, Any]:
        order = self.orders.get_order(order_id, user_id)

        if order.payment_status == PaymentStatus.COMPLETED or order.is_paid:
            raise AlreadyPaid()

        card_number = validate_card(card_details)

        #anulowanego zamowienia nie da sie oplacic
        status_after_payment(order.status)

        if card_number in MOCK_DECLINED_CARDS:
            return self._decline(order)

        ensure_payment_transition(order.payment_status, PaymentStatus.COMPLETED)

        payment_order_ref = mock_gateway_id("order")
        payment_ref = mock_gateway_id("pay")

        self._write_payment(
            order,
            {
                "payment_status": PaymentStatus.COMPLETED,
                "payment_order_ref": payment_order_ref,
                "payment_ref": payment_ref,
                "is_paid": True,
                "paid_at": datetime.now(timezone.utc),
            },
            advance_status=True,
        )

        logger.info(f"Zamowienie {order.order_number} oplacone ({payment_ref})")
        self.notification_service.payment_completed(order.user_id, order.order_number)

        return {
            "order": self.repo.refresh(order),
            "payment_order_ref": payment_order_ref,
            "payment_ref": payment_ref,
        }

    def _decline(self, order) -> Dict[str, Any]:
        ensure_payment_transition(order.payment_status, PaymentStatus.FAILED)

        self._write_payment(order, {"payment_status": PaymentStatus.FAILED}, advance_status=False)

        logger.warning(f"Karta odrzucona dla zamowienia {order.order_number}")
        return {
            "order": self.repo.refresh(order),
            "payment_order_ref": None,
            "payment_ref": None,
        }

    def _write_payment(self, order, values: Dict[str, Any], advance_status: bool) -> None:
        """
        Jeden UPDATE: platnosc + status zamowienia, warunek na status odczytany
        przed zapisem. Jesli ktos zmienil zamowienie w miedzyczasie, czytamy je
        ponownie i liczymy status od nowa (anulowane -> wyjatek).
        """
        try:
            for _ in range(_WRITE_ATTEMPTS):
                expected = OrderStatus(order.status)
                new_status = status_after_payment(expected)

                row = dict(values)
                if advance_status:
                    row["status"] = new_status

                if self.repo.update_payment(order.id, expected, row):
                    self.repo.commit()
                    return

                self.repo.rollback()
                self.repo.refresh(order)
                logger.warning(
                    f"Zamowienie {order.id} zmienione w trakcie platnosci: "
                    f"{expected.value} -> {OrderStatus(order.status).value}"
                )
                if order.payment_status == PaymentStatus.COMPLETED or order.is_paid:
                    raise AlreadyPaid()

            raise InvalidStatusTransition(OrderStatus(order.status).value, OrderStatus.CONFIRMED.value)
        except Exception:
            self.repo.rollback()
            raise
