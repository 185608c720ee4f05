# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_checkout_service, get_payment_service, http_error, is_admin
from storefront.domain.errors import ShopError
from storefront.domain.schemas import CheckoutIn, OrderOut, PaymentIn, PaymentOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.payment_service import PaymentService

router = APIRouter(tags=["checkout"])


@router.post("/checkout", response_model=OrderOut, status_code=201)
def create_checkout(
    payload: CheckoutIn,
    user_id: int = Query(..., gt=0),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Tworzy zamowienie z podanych pozycji albo z calego koszyka.
    """
    try:
        return svc.checkout(
            user_id=user_id,
            items=[(line.product_id, line.quantity) for line in payload.items],
            shipping_address=payload.shipping_address.model_dump(),
            billing_address=payload.billing_address.model_dump(),
            payment_method=payload.payment_method,
        )
    except ShopError as e:
        raise http_error(e)


@router.get("/checkout/{order_id}", response_model=OrderOut)
def get_order_confirmation(
    order_id: int,
    user_id: int = Query(..., gt=0),
    admin: bool = Depends(is_admin),
    svc: CheckoutService = Depends(get_checkout_service),
):
    try:
        return svc.get_confirmation(order_id, user_id, is_admin=admin)
    except ShopError as e:
        raise http_error(e)


@router.post("/payments", response_model=PaymentOut)
def process_payment(
    payload: PaymentIn,
    user_id: int = Query(..., gt=0),
    svc: PaymentService = Depends(get_payment_service),
):
    """
    Mock bramki platnosci (synchronicznie).
    """
    try:
        return svc.pay(payload.order_id, user_id, payload.card_details.model_dump())
    except ShopError as e:
        raise http_error(e)
