# storefront/api/routers/cart.py
from typing import Optional, Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.errors import ValidationError
from storefront.domain.schemas import CartAddIn, CartOut, CartRemoveIn, EmptyCartOut, MessageOut, SessionUser, SuccessOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("", response_model=SuccessOut)
def add_item(payload: CartAddIn, db: Session = Depends(get_db)):
    CartService(db).add_item(
        user_id=payload.user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )
    return SuccessOut(success=True, message="Item added to cart")


@router.get("", response_model=Union[CartOut, EmptyCartOut])
def get_cart(
    user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).get_cart(user.id)


@router.delete("", response_model=MessageOut)
def remove_item(
    payload: Optional[CartRemoveIn] = None,
    user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if payload is None or not payload.item_id:
        raise ValidationError.for_field("itemId", "Item ID is required")

    CartService(db).remove_item(user.id, payload.item_id)
    return MessageOut(message="Item removed successfully")
