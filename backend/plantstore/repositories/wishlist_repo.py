from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from plantstore.models.wishlist import Wishlist
from plantstore.models.wishlist_item import WishlistItem  # noqa: F401  (relationship target)


class WishlistRepository:
    def __init__(self, db: Session):
        self.db = db

    def load(self, user_id: str) -> Optional[Wishlist]:
        return self.db.query(Wishlist).filter(Wishlist.user_id == user_id).first()

    def new(self, user_id: str) -> Wishlist:
        return Wishlist(user_id=user_id, items=[])

    def save(self, wishlist: Wishlist) -> Wishlist:
        wishlist.updated_at = datetime.now(timezone.utc)
        self.db.add(wishlist)
        self.db.flush()
        return wishlist
