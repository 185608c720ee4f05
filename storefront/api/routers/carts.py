#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_cart_service, http_error
from storefront.domain.errors import ShopError
from storefront.domain.schemas import AddItemIn, CartOut, UpdateItemIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Query(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart(user_id)
    except ShopError as e:
        raise http_error(e)


@router.post("/items", response_model=CartOut, status_code=201)
def add_item(
    payload: AddItemIn,
    user_id: int = Query(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(user_id, payload.product_id, payload.quantity)
    except ShopError as e:
        raise http_error(e)


@router.patch("/items/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: UpdateItemIn,
    user_id: int = Query(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_item(user_id, item_id, payload.quantity)
    except ShopError as e:
        raise http_error(e)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    user_id: int = Query(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.remove_item(user_id, item_id)
    except ShopError as e:
        raise http_error(e)


@router.delete("", response_model=CartOut)
def clear_cart(
    user_id: int = Query(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.clear(user_id)
    except ShopError as e:
        raise http_error(e)
