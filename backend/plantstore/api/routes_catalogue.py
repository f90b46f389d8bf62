import math
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from plantstore.api.responses import ok
from plantstore.db import get_db
from plantstore.errors import NotFound
from plantstore.repositories.plant_repo import SORTABLE_FIELDS, PlantRepository
from plantstore.schemas.plant_schema import PlantOut
from plantstore.services.references import is_valid_plant_reference
from plantstore.utils.transactions import translate_store_errors

router = APIRouter(prefix="/api/plants", tags=["catalogue"])


def _to_dict(p):
    return PlantOut.model_validate(p).model_dump(by_alias=True)


@router.get("", summary="List plants")
def list_plants(
    search: Optional[str] = Query(None, description="search term"),
    category: Optional[str] = Query(None),
    in_stock: bool = Query(False, alias="inStock"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    sort_by: str = Query("createdAt", alias="sortBy", pattern="^(" + "|".join(SORTABLE_FIELDS) + ")$"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    if category == "all":
        category = None
    with translate_store_errors("plants.list"):
        items, total = PlantRepository(db).list(
            search=search,
            category=category,
            in_stock=in_stock,
            page=page,
            size=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        plants = [_to_dict(p) for p in items]
    return {
        **ok(plants),
        "pagination": {
            "current": page,
            "total": math.ceil(total / limit),
            "count": len(plants),
            "totalItems": total,
        },
    }


@router.get("/categories/list", summary="List categories in use")
def list_categories(db: Session = Depends(get_db)):
    with translate_store_errors("plants.categories"):
        return ok(PlantRepository(db).categories())


@router.get("/{plant_id}", summary="Get plant by id")
def get_plant(plant_id: str, db: Session = Depends(get_db)):
    if not is_valid_plant_reference(plant_id):
        raise NotFound("Plant not found")
    with translate_store_errors("plants.get"):
        p = PlantRepository(db).resolve(plant_id)
        if not p:
            raise NotFound("Plant not found")
        return ok(_to_dict(p))
