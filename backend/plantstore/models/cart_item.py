from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from plantstore.db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("cart_id", "plant_id", name="uq_cart_items_cart_plant"),)

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(
        Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # no FK to plants: a deleted plant leaves the line in place until it is touched
    plant_id = Column(String(32), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)  # unit price captured at first add
    added_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    cart = relationship("Cart", back_populates="items")
