import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from plantstore.config import settings
from plantstore.errors import AlreadyExists, NotFound
from plantstore.models.plant import Plant
from plantstore.models.wishlist_item import WishlistItem
from plantstore.repositories.plant_repo import PlantRepository
from plantstore.repositories.wishlist_repo import WishlistRepository
from plantstore.services.references import hydrate, plant_summary, validate_plant_reference
from plantstore.utils.locks import user_lock
from plantstore.utils.transactions import commit_or_rollback, translate_store_errors
from plantstore.utils.validators import require_text

log = logging.getLogger("wishlist")


def _render_item(item: WishlistItem, plant: Plant) -> Dict[str, Any]:
    return {**plant_summary(plant), "notes": item.notes, "addedAt": item.added_at}


class WishlistService:
    """
    Saved plants per user. Unlike the cart, adding a plant twice is rejected
    rather than merged, and the only figure derived from it is the count.
    """

    def __init__(self, db: Session):
        self.db = db
        self.wishlist_repo = WishlistRepository(db)
        self.plant_repo = PlantRepository(db)

    def get(self, user_id: str) -> Dict[str, Any]:
        with translate_store_errors("wishlist.get"):
            wishlist = self.wishlist_repo.load(user_id)
            if not wishlist:
                return {"plants": [], "totalItems": 0}
            plants = hydrate(wishlist.items, self.plant_repo, _render_item)
        return {"plants": plants, "totalItems": len(plants), "updatedAt": wishlist.updated_at}

    def add_plant(self, user_id: str, plant_id: Any, notes: Any = "") -> Dict[str, Any]:
        plant_id = validate_plant_reference(plant_id)
        notes = require_text(notes, "Notes", settings.WISHLIST_NOTES_MAX_LENGTH)

        with translate_store_errors("wishlist.add_plant"):
            plant = self.plant_repo.resolve(plant_id)
            if not plant:
                raise NotFound("Plant not found")

            with user_lock("wishlist", user_id), commit_or_rollback(self.db):
                wishlist = self.wishlist_repo.load(user_id) or self.wishlist_repo.new(user_id)
                if wishlist.contains(plant_id):
                    log.debug("wishlist %s: %s already present", user_id, plant_id)
                    raise AlreadyExists("Plant already in wishlist", data={"isInWishlist": True})
                wishlist.items.append(WishlistItem(plant_id=plant_id, notes=notes))
                self.wishlist_repo.save(wishlist)

        log.info("wishlist %s: added %s", user_id, plant_id)
        return {"totalItems": len(wishlist.items), "addedItem": plant.name}

    def remove_plant(self, user_id: str, plant_id: Any) -> Dict[str, Any]:
        plant_id = validate_plant_reference(plant_id)

        with translate_store_errors("wishlist.remove_plant"):
            with user_lock("wishlist", user_id), commit_or_rollback(self.db):
                wishlist = self.wishlist_repo.load(user_id)
                if not wishlist:
                    raise NotFound("Wishlist not found")
                before = len(wishlist.items)
                wishlist.items = [it for it in wishlist.items if it.plant_id != plant_id]
                if len(wishlist.items) == before:
                    raise NotFound("Plant not found in wishlist")
                self.wishlist_repo.save(wishlist)

        log.info("wishlist %s: removed %s", user_id, plant_id)
        return {"totalItems": len(wishlist.items)}
