# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import ShopError
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService
from storefront.services.payment_service import PaymentService


#auth jest poza tym serwisem, przed nami gateway ustawia role w naglowku
def is_admin(x_user_role: str | None = Header(default=None)) -> bool:
    return (x_user_role or "").lower() == "admin"


def require_admin(admin: bool = Depends(is_admin)) -> None:
    if not admin:
        raise HTTPException(status_code=403, detail={"code": "access_denied", "message": "Admin only"})


def get_lock_service() -> LockService:
    return LockService()


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def get_checkout_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CheckoutService:
    return CheckoutService(db=db, lock_service=lock_service)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService(db)


def http_error(e: ShopError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_dict())
