import logging
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from plantstore.config import settings
from plantstore.errors import InvalidArgument, NotFound, Unavailable
from plantstore.models.cart import Cart
from plantstore.models.cart_item import CartItem
from plantstore.models.plant import Plant
from plantstore.repositories.cart_repo import CartRepository
from plantstore.repositories.plant_repo import PlantRepository
from plantstore.services.references import hydrate, plant_summary, validate_plant_reference
from plantstore.utils.locks import user_lock
from plantstore.utils.transactions import commit_or_rollback, translate_store_errors
from plantstore.utils.validators import require_quantity

log = logging.getLogger("cart")


def _totals(cart: Cart) -> Dict[str, Any]:
    return {"totalItems": cart.total_items, "totalAmount": cart.total_amount}


def _render_item(item: CartItem, plant: Plant) -> Dict[str, Any]:
    return {
        **plant_summary(plant),
        "quantity": item.quantity,
        "cartPrice": item.price,
        "addedAt": item.added_at,
    }


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.plant_repo = PlantRepository(db)

    def get(self, user_id: str) -> Dict[str, Any]:
        with translate_store_errors("cart.get"):
            cart = self.cart_repo.load(user_id)
            if not cart:
                return {"items": [], "totalItems": 0, "totalAmount": Decimal("0")}
            items = hydrate(cart.items, self.plant_repo, _render_item)
        if len(items) != len(cart.items):
            log.debug("cart %s: %d line(s) reference missing plants", user_id, len(cart.items) - len(items))
        return {"items": items, **_totals(cart), "updatedAt": cart.updated_at}

    def add_item(self, user_id: str, plant_id: Any, quantity: Any = 1) -> Dict[str, Any]:
        plant_id = validate_plant_reference(plant_id)
        qty = require_quantity(quantity, maximum=settings.MAX_ITEM_QUANTITY)

        with translate_store_errors("cart.add_item"):
            plant = self.plant_repo.resolve(plant_id)
            if not plant:
                raise NotFound("Plant not found")
            if not plant.is_available:
                raise Unavailable("Plant is not available")

            with user_lock("cart", user_id), commit_or_rollback(self.db):
                cart = self.cart_repo.load(user_id) or self.cart_repo.new(user_id)
                item = cart.find_item(plant_id)
                if item:
                    if item.quantity + qty > settings.MAX_ITEM_QUANTITY:
                        raise InvalidArgument(
                            f"Quantity cannot exceed {settings.MAX_ITEM_QUANTITY} (already {item.quantity} in cart)"
                        )
                    # first-add price stays until the line is removed
                    item.quantity += qty
                else:
                    cart.items.append(CartItem(plant_id=plant_id, quantity=qty, price=plant.price))
                cart.recompute_totals()
                self.cart_repo.save(cart)

        log.info("cart %s: added %d x %s", user_id, qty, plant_id)
        return {**_totals(cart), "addedItem": plant.name}

    def update_quantity(self, user_id: str, plant_id: Any, quantity: Any) -> Dict[str, Any]:
        qty = require_quantity(quantity, maximum=settings.MAX_ITEM_QUANTITY)
        plant_id = validate_plant_reference(plant_id)

        with translate_store_errors("cart.update_quantity"):
            with user_lock("cart", user_id), commit_or_rollback(self.db):
                cart = self.cart_repo.load(user_id)
                if not cart:
                    raise NotFound("Cart not found")
                item = cart.find_item(plant_id)
                if not item:
                    raise NotFound("Item not found in cart")
                item.quantity = qty
                cart.recompute_totals()
                self.cart_repo.save(cart)

        log.info("cart %s: set %s quantity to %d", user_id, plant_id, qty)
        return _totals(cart)

    def remove_item(self, user_id: str, plant_id: Any) -> Dict[str, Any]:
        plant_id = validate_plant_reference(plant_id)

        with translate_store_errors("cart.remove_item"):
            with user_lock("cart", user_id), commit_or_rollback(self.db):
                cart = self.cart_repo.load(user_id)
                if not cart:
                    raise NotFound("Cart not found")
                before = len(cart.items)
                cart.items = [it for it in cart.items if it.plant_id != plant_id]
                if len(cart.items) == before:
                    raise NotFound("Item not found in cart")
                cart.recompute_totals()
                self.cart_repo.save(cart)

        log.info("cart %s: removed %s", user_id, plant_id)
        return _totals(cart)

    def clear(self, user_id: str) -> Dict[str, Any]:
        with translate_store_errors("cart.clear"):
            with user_lock("cart", user_id), commit_or_rollback(self.db):
                cart = self.cart_repo.load(user_id)
                if not cart:
                    raise NotFound("Cart not found")
                cart.items = []
                cart.recompute_totals()
                self.cart_repo.save(cart)

        log.info("cart %s: cleared", user_id)
        return _totals(cart)
