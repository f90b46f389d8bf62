from decimal import Decimal

from sqlalchemy import Column, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from plantstore.db import Base


class Cart(Base):
    __tablename__ = "carts"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), unique=True, index=True, nullable=False)
    total_items = Column(Integer, nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
        lazy="selectin",
    )

    # UPDATE ... WHERE version = :loaded_version; a stale write raises StaleDataError
    __mapper_args__ = {"version_id_col": version}

    def find_item(self, plant_id: str):
        return next((it for it in self.items if it.plant_id == plant_id), None)

    def recompute_totals(self) -> None:
        """Derive both totals from the current item list. Never patched incrementally."""
        self.total_items = sum(it.quantity for it in self.items)
        self.total_amount = sum(
            (Decimal(it.price) * it.quantity for it in self.items), Decimal("0")
        )
