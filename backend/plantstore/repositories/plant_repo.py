from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import String, asc, cast, desc, func, or_
from sqlalchemy.orm import Session

from plantstore.models.plant import Plant

SORTABLE_FIELDS = {
    "createdAt": Plant.created_at,
    "name": Plant.name,
    "price": Plant.price,
    "popularity": Plant.popularity,
}


class PlantRepository:
    """Read side of the plant catalogue. Carts and wishlists only ever resolve through it."""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, plant_id: str) -> Optional[Plant]:
        # always re-read: prices captured at add time must be the current ones
        return self.db.get(Plant, plant_id, populate_existing=True)

    def resolve_many(self, plant_ids: Iterable[str]) -> Dict[str, Plant]:
        ids = list(set(plant_ids))
        if not ids:
            return {}
        rows = self.db.query(Plant).filter(Plant.id.in_(ids)).populate_existing().all()
        return {p.id: p for p in rows}

    def list(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        in_stock: bool = False,
        page: int = 1,
        size: int = 20,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Tuple[List[Plant], int]:
        query = self.db.query(Plant)
        if search:
            like = f"%{search}%"
            query = query.filter(
                or_(
                    Plant.name.ilike(like),
                    Plant.description.ilike(like),
                    Plant.scientific_name.ilike(like),
                    cast(Plant.categories, String).ilike(like),
                )
            )
        if category:
            # categories is a JSON array; match the quoted element in its text form
            query = query.filter(cast(Plant.categories, String).like(f'%"{category}"%'))
        if in_stock:
            query = query.filter(Plant.is_available.is_(True))

        total = query.with_entities(func.count(Plant.id)).scalar() or 0
        column = SORTABLE_FIELDS.get(sort_by, Plant.created_at)
        direction = asc if sort_order == "asc" else desc
        items = (
            query.order_by(direction(column), Plant.id)
            .offset((page - 1) * size)
            .limit(size)
            .all()
        )
        return items, total

    def categories(self) -> List[str]:
        seen = set()
        for (cats,) in self.db.query(Plant.categories).all():
            seen.update(cats or [])
        return sorted(seen)

    def create_or_update(self, name: str, price, categories: List[str], **attrs) -> Plant:
        p = self.db.query(Plant).filter(Plant.name == name).first()
        if p:
            p.price = price
            p.categories = list(categories)
            for key, value in attrs.items():
                setattr(p, key, value)
        else:
            p = Plant(name=name, price=price, categories=list(categories), **attrs)
            self.db.add(p)
        self.db.flush()
        return p

    def delete(self, plant_id: str) -> bool:
        p = self.resolve(plant_id)
        if not p:
            return False
        self.db.delete(p)
        self.db.flush()
        return True
