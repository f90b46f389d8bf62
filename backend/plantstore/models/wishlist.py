from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from plantstore.db import Base


class Wishlist(Base):
    __tablename__ = "wishlists"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), unique=True, index=True, nullable=False)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "WishlistItem",
        back_populates="wishlist",
        cascade="all, delete-orphan",
        order_by="WishlistItem.id",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    def contains(self, plant_id: str) -> bool:
        return any(it.plant_id == plant_id for it in self.items)
