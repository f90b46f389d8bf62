from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from plantstore.models.cart import Cart
from plantstore.models.cart_item import CartItem  # noqa: F401  (relationship target)


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def load(self, user_id: str) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.user_id == user_id).first()

    def new(self, user_id: str) -> Cart:
        return Cart(user_id=user_id, items=[])

    def save(self, cart: Cart) -> Cart:
        """Persist the whole aggregate; a cart without a row yet is inserted."""
        cart.updated_at = datetime.now(timezone.utc)
        self.db.add(cart)
        self.db.flush()
        return cart
