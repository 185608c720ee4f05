# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_order_service, http_error, is_admin, require_admin
from storefront.domain.errors import ShopError
from storefront.domain.schemas import OrderListOut, OrderOut, StatusUpdateIn
from storefront.domain.status import OrderStatus
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderListOut)
def list_orders(
    user_id: int = Query(..., gt=0),
    status: OrderStatus | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: bool = Depends(is_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(user_id, is_admin=admin, status=status, page=page, limit=limit)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Query(..., gt=0),
    admin: bool = Depends(is_admin),
    svc: OrderService = Depends(get_order_service),
):
    """
    Pobiera szczegoly zamowienia.
    """
    try:
        return svc.get_order(order_id, user_id, is_admin=admin)
    except ShopError as e:
        raise http_error(e)


@router.post("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    user_id: int = Query(..., gt=0),
    admin: bool = Depends(is_admin),
    svc: OrderService = Depends(get_order_service),
):
    try:
        return svc.cancel(order_id, user_id, is_admin=admin)
    except ShopError as e:
        raise http_error(e)


@router.put("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_order_status(
    order_id: int,
    payload: StatusUpdateIn,
    svc: OrderService = Depends(get_order_service),
):
    try:
        return svc.update_status(order_id, payload.status)
    except ShopError as e:
        raise http_error(e)
