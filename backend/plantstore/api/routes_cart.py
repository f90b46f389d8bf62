from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from plantstore.api.responses import ok
from plantstore.db import get_db
from plantstore.schemas.cart_schema import AddCartItemIn, UpdateCartItemIn
from plantstore.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("/{user_id}", summary="Get user's cart")
def get_cart(user_id: str, db: Session = Depends(get_db)):
    return ok(CartService(db).get(user_id))


@router.post("/{user_id}", status_code=status.HTTP_201_CREATED, summary="Add item to cart")
def add_item(user_id: str, payload: AddCartItemIn, db: Session = Depends(get_db)):
    data = CartService(db).add_item(user_id, payload.plantId, payload.quantity)
    return ok(data, "Item added to cart successfully")


@router.put("/{user_id}/{plant_id}", summary="Update item quantity in cart")
def update_item(user_id: str, plant_id: str, payload: UpdateCartItemIn, db: Session = Depends(get_db)):
    data = CartService(db).update_quantity(user_id, plant_id, payload.quantity)
    return ok(data, "Cart updated successfully")


@router.delete("/{user_id}/{plant_id}", summary="Remove item from cart")
def remove_item(user_id: str, plant_id: str, db: Session = Depends(get_db)):
    return ok(CartService(db).remove_item(user_id, plant_id), "Item removed from cart")


@router.delete("/{user_id}", summary="Clear entire cart")
def clear_cart(user_id: str, db: Session = Depends(get_db)):
    return ok(CartService(db).clear(user_id), "Cart cleared successfully")
