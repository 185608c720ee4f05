from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, JSON, Enum
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.domain.status import OrderStatus, PaymentStatus


def _utcnow():
    return datetime.now(timezone.utc)


def _enum_column(enum_cls, default):
    return Column(
        Enum(enum_cls, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=default,
        index=True,
    )


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    order_number = Column(String(40), nullable=False, unique=True)
    order_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    #kwoty zamrozone w chwili checkoutu
    subtotal = Column(Numeric(12, 2), nullable=False)
    tax = Column(Numeric(12, 2), nullable=False)
    shipping_charges = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)

    status = _enum_column(OrderStatus, OrderStatus.PENDING)
    payment_status = _enum_column(PaymentStatus, PaymentStatus.PENDING)
    payment_method = Column(String(20), nullable=False)
    payment_order_ref = Column(String(64), nullable=True)
    payment_ref = Column(String(64), nullable=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    shipping_address = Column(JSON, nullable=False)
    billing_address = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
        lazy="selectin",
    )
