from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from plantstore.db import Base


class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (
        UniqueConstraint("wishlist_id", "plant_id", name="uq_wishlist_items_wishlist_plant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    wishlist_id = Column(
        Integer, ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    plant_id = Column(String(32), nullable=False, index=True)
    # WISHLIST_NOTES_MAX_LENGTH is capped at this width
    notes = Column(String(500), nullable=True)
    added_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    wishlist = relationship("Wishlist", back_populates="items")
