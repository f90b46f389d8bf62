from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from plantstore.api.responses import ok
from plantstore.db import get_db
from plantstore.schemas.cart_schema import AddWishlistPlantIn
from plantstore.services.wishlist_service import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("/{user_id}", summary="Get user's wishlist")
def get_wishlist(user_id: str, db: Session = Depends(get_db)):
    return ok(WishlistService(db).get(user_id))


@router.post("/{user_id}", status_code=status.HTTP_201_CREATED, summary="Add plant to wishlist")
def add_plant(user_id: str, payload: AddWishlistPlantIn, db: Session = Depends(get_db)):
    data = WishlistService(db).add_plant(user_id, payload.plantId, payload.notes)
    return ok(data, "Plant added to wishlist successfully")


@router.delete("/{user_id}/{plant_id}", summary="Remove plant from wishlist")
def remove_plant(user_id: str, plant_id: str, db: Session = Depends(get_db)):
    return ok(WishlistService(db).remove_plant(user_id, plant_id), "Plant removed from wishlist")
