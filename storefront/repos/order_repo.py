# storefront/repos/order_repo.py
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.status import OrderStatus, PaymentStatus


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #flush bez commita, numer zamowienia sprawdzany przez unique index
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def refresh(self, order: OrderModel) -> OrderModel:
        self.db.refresh(order)
        return order

    def list_orders(
        self,
        user_id: int | None = None,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[list[OrderModel], int]:
        filters = []
        if user_id is not None:
            filters.append(OrderModel.user_id == user_id)
        if status is not None:
            filters.append(OrderModel.status == status)

        total = self.db.execute(
            select(func.count(OrderModel.id)).where(*filters)
        ).scalar_one()

        rows = self.db.execute(
            select(OrderModel)
            .where(*filters)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset(offset)
            .limit(limit)
        ).scalars().all()

        return list(rows), total

    def update_status(self, order_id: int, old_status: OrderStatus, new_status: OrderStatus) -> int:
        # update orders set status = new where id = ? and status = old
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == old_status)
            .values(status=new_status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def update_payment(self, order_id: int, expected_status: OrderStatus, values: Dict[str, Any]) -> int:
        #nigdy nie nadpisujemy zakonczonej platnosci ani statusu zmienionego w miedzyczasie
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.status == expected_status,
                OrderModel.payment_status != PaymentStatus.COMPLETED,
            )
            .values(updated_at=datetime.now(timezone.utc), **values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
