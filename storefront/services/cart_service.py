from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import InvalidQuantity, ItemNotFound, ProductNotFound
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _ensure_quantity(quantity) -> int:
    #bool to tez int w pythonie, odrzucamy
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        raise InvalidQuantity(quantity)
    return quantity


class CartService:
    """
    Prosta implementacja cqrs dla domeny cart
    commands (add, update, remove, clear) modyfikuja stan
    query (get, materialize) tylko odczyt

    Koszyk trzyma tylko ilosci, ceny zawsze czytane na zywo z katalogu.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_or_create(self, user_id: int) -> CartModel:
        cart = self.repo.get_by_user(user_id)
        if cart:
            return cart

        cart = self.repo.create_cart(user_id)
        logger.info(f"Utworzono nowy koszyk {cart.id} dla uzytkownika {user_id}")
        return cart

    def get_cart(self, user_id: int) -> Dict[str, Any]:
        return self.materialize(self.get_or_create(user_id))

    def materialize(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_items(cart.id)
        products = self.products.get_many(i.product_id for i in items)

        lines = []
        subtotal = Decimal("0.00")
        total_quantity = 0

        for item in items:
            product = products.get(item.product_id)
            #produkt usuniety z katalogu - pomijamy w widoku, w bazie zostaje
            if product is None:
                continue

            subtotal += product.price * item.quantity
            total_quantity += item.quantity
            lines.append(
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "product": {
                        "id": product.id,
                        "name": product.name,
                        "price": product.price,
                        "stock": product.stock,
                        "image_url": product.image_url,
                        "is_active": product.is_active,
                    },
                }
            )

        #dict przeksztalcany w jsona
        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": lines,
            "subtotal": subtotal,
            "total_quantity": total_quantity,
        }

    #commands
    def add_item(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        _ensure_quantity(quantity)

        product = self.products.get(product_id)
        if product is None or not product.is_active:
            raise ProductNotFound(product_id)

        cart = self.get_or_create(user_id)

        if self.repo.increment_item_quantity(cart.id, product_id, quantity):
            logger.info(f"Produkt {product_id} juz jest w koszyku {cart.id}, zwiekszam ilosc o {quantity}")
        else:
            logger.info(f"Dodaje nowy produkt {product_id} do koszyka {cart.id}")
            try:
                self.repo.add_item(
                    CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
                )
            except IntegrityError:
                #rownolegle zapytanie dodalo ten produkt pierwsze, dokladamy ilosc
                self.repo.rollback()
                logger.warning(f"Produkt {product_id} dodany rownolegle do koszyka {cart.id}")
                self.repo.increment_item_quantity(cart.id, product_id, quantity)

        self.repo.commit()
        return self.get_cart(user_id)

    def update_item(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        _ensure_quantity(quantity)

        cart = self.get_or_create(user_id)
        item = self.repo.get_item(cart.id, item_id)
        if item is None:
            raise ItemNotFound(item_id)

        item.quantity = quantity
        self.repo.add_item(item)
        self.repo.commit()

        logger.info(f"Pozycja {item_id} w koszyku {cart.id}: ilosc {quantity}")
        return self.get_cart(user_id)

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        cart = self.get_or_create(user_id)
        item = self.repo.get_item(cart.id, item_id)
        if item is None:
            raise ItemNotFound(item_id)

        self.repo.delete_item(item)
        self.repo.commit()

        logger.info(f"Usunieto pozycje {item_id} z koszyka {cart.id}")
        return self.get_cart(user_id)

    def clear(self, user_id: int) -> Dict[str, Any]:
        cart = self.get_or_create(user_id)
        removed = self.repo.clear_items(cart.id)
        self.repo.commit()

        logger.info(f"Koszyk {cart.id} wyczyszczony, usunieto {removed} pozycji")
        return self.get_cart(user_id)
