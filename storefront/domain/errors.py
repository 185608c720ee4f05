# storefront/domain/errors.py
"""
Bledy domenowe. Kazdy niesie kod, status HTTP i szczegoly,
routery tlumacza je 1:1 na HTTPException.
"""
from typing import Any, Dict


class ShopError(Exception):
    code = "shop_error"
    status_code = 400

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.details}


class InvalidQuantity(ShopError, ValueError):
    code = "invalid_quantity"

    def __init__(self, quantity: Any):
        super().__init__(f"Quantity must be a positive integer, got {quantity!r}", quantity=quantity)


class ProductNotFound(ShopError, LookupError):
    code = "product_not_found"
    status_code = 404

    def __init__(self, product_id: int):
        super().__init__(f"Product with ID {product_id} not found", product_id=product_id)


class ProductInactive(ShopError, ValueError):
    code = "product_inactive"

    def __init__(self, product_id: int, name: str):
        super().__init__(f"Product {name} is not available", product_id=product_id, name=name)


class InsufficientStock(ShopError, ValueError):
    code = "insufficient_stock"
    status_code = 409

    def __init__(self, product_id: int, name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {name}. Available: {available}, Requested: {requested}",
            product_id=product_id,
            name=name,
            requested=requested,
            available=available,
        )
        self.requested = requested
        self.available = available


class ItemNotFound(ShopError, LookupError):
    code = "item_not_found"
    status_code = 404

    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} not found", item_id=item_id)


class OrderNotFound(ShopError, LookupError):
    code = "order_not_found"
    status_code = 404

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found", order_id=order_id)


class AccessDenied(ShopError, PermissionError):
    code = "access_denied"
    status_code = 403

    def __init__(self, resource: str, resource_id: int):
        super().__init__("Access denied", resource=resource, resource_id=resource_id)


class InvalidStatusTransition(ShopError, ValueError):
    code = "invalid_status_transition"
    status_code = 409

    def __init__(self, current: str, requested: str, field: str = "status"):
        super().__init__(
            f"Cannot change {field} from {current} to {requested}",
            field=field,
            current=current,
            requested=requested,
        )


class AlreadyPaid(ShopError, ValueError):
    code = "already_paid"
    status_code = 409

    def __init__(self):
        super().__init__("Order is already paid")


class InvalidPaymentDetails(ShopError, ValueError):
    code = "invalid_payment_details"

    def __init__(self, field: str):
        super().__init__(f"Invalid card details: {field}", field=field)


class EmptyCheckout(ShopError, ValueError):
    code = "empty_checkout"

    def __init__(self):
        super().__init__("Nothing to check out, the cart is empty")


class CheckoutInProgress(ShopError, RuntimeError):
    code = "checkout_in_progress"
    status_code = 409

    def __init__(self, user_id: int):
        super().__init__("Another checkout is already in progress", user_id=user_id)
