# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List
from decimal import Decimal
from datetime import datetime

from storefront.domain.status import OrderStatus, PaymentMethod, PaymentStatus


class AddItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")


class UpdateItemIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Nowa ilosc (musi byc > 0)")


class CartProductOut(BaseModel):
    id: int
    name: str
    price: Decimal
    stock: int
    image_url: str | None = None
    is_active: bool


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: int
    product_id: int
    quantity: int
    product: CartProductOut


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]
    subtotal: Decimal
    total_quantity: int


class AddressIn(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=3, max_length=30)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1)


class CheckoutLineIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class CardDetailsIn(BaseModel):
    """Bez walidacji dlugosci numeru tutaj - robi to symulator platnosci."""

    cardholder_name: str | None = None
    card_number: str
    expiry_date: str | None = None
    cvv: str | None = None


class CheckoutIn(BaseModel):
    """Pusta lista items = checkout calego koszyka."""

    items: List[CheckoutLineIn] = Field(default_factory=list)
    shipping_address: AddressIn
    billing_address: AddressIn
    payment_method: PaymentMethod


class PaymentIn(BaseModel):
    order_id: int = Field(..., gt=0)
    card_details: CardDetailsIn


class StatusUpdateIn(BaseModel):
    status: OrderStatus


class OrderItemOut(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    order_number: str
    order_date: datetime
    items: List[OrderItemOut]
    subtotal: Decimal
    tax: Decimal
    shipping_charges: Decimal
    total_amount: Decimal
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: str
    payment_order_ref: str | None = None
    payment_ref: str | None = None
    is_paid: bool
    paid_at: datetime | None = None
    shipping_address: dict
    billing_address: dict
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


class OrderListOut(BaseModel):
    data: List[OrderOut]
    pagination: PaginationOut

    model_config = ConfigDict(from_attributes=True)


class PaymentOut(BaseModel):
    order: OrderOut
    payment_order_ref: str | None = None
    payment_ref: str | None = None

    model_config = ConfigDict(from_attributes=True)
