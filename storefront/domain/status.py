# storefront/domain/status.py
"""
Maszyna stanow zamowienia i platnosci.

Jedyne miejsce gdzie sprawdzamy czy przejscie jest legalne,
serwisy pytaja tylko ensure_* i dostaja wyjatek albo nic.
"""
import enum

from storefront.domain.errors import AlreadyPaid, InvalidStatusTransition


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentMethod(str, enum.Enum):
    RAZORPAY = "razorpay"
    CARD = "card"
    COD = "cod"


#sciezka szczesliwa + anulowanie z pending/confirmed
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})
CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})

#admin moze ustawic dowolny z tych, z pominieciem kolejnosci
ADMIN_TARGETS = frozenset(
    {OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
)

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    #odrzucona karta, mozna sprobowac ponownie
    PaymentStatus.FAILED: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.COMPLETED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS[OrderStatus(current)]


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    """Scisla kolejnosc statusow, dla operacji wywolywanych przez klienta."""
    current, target = OrderStatus(current), OrderStatus(target)
    if not can_transition(current, target):
        raise InvalidStatusTransition(current.value, target.value)


def ensure_cancellable(current: OrderStatus) -> None:
    current = OrderStatus(current)
    if current not in CANCELLABLE_STATUSES:
        raise InvalidStatusTransition(current.value, OrderStatus.CANCELLED.value)


def ensure_admin_transition(current: OrderStatus, target: OrderStatus) -> None:
    """
    Admin override: omija kolejnosc statusow, ale nie omija
    stanow terminalnych ani zakazu anulowania po wysylce.
    """
    current, target = OrderStatus(current), OrderStatus(target)

    if target not in ADMIN_TARGETS or target == current:
        raise InvalidStatusTransition(current.value, target.value)

    if current in TERMINAL_STATUSES:
        raise InvalidStatusTransition(current.value, target.value)

    if target == OrderStatus.CANCELLED:
        ensure_cancellable(current)


def ensure_payment_transition(current: PaymentStatus, target: PaymentStatus) -> None:
    current, target = PaymentStatus(current), PaymentStatus(target)
    if current == PaymentStatus.COMPLETED:
        raise AlreadyPaid()
    if target not in PAYMENT_TRANSITIONS[current]:
        raise InvalidStatusTransition(current.value, target.value, field="payment_status")


def status_after_payment(current: OrderStatus) -> OrderStatus:
    """Udana platnosc potwierdza zamowienie, inne statusy zostaja bez zmian."""
    current = OrderStatus(current)
    if current == OrderStatus.CANCELLED:
        raise InvalidStatusTransition(current.value, OrderStatus.CONFIRMED.value)
    if current == OrderStatus.PENDING:
        return OrderStatus.CONFIRMED
    return current
