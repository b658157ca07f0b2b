#app/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_mirror, validation_http_error, store_http_error
from app.data.database import get_db
from app.domain.errors import ValidationError, StoreError
from app.domain.schemas import (
    QuantityChangeIn,
    QuantityChangeOut,
    ReplaceCartIn,
    CartOut,
)
from app.services.cart_mirror import CartMirror
from app.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session, mirror: CartMirror):
    return CartService(db=db, mirror=mirror)


@router.get("/{user_id}", response_model=CartOut)
def get_cart(
    user_id: str,
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        return svc.get_cart(user_id)
    except StoreError as e:
        raise store_http_error(e)


@router.post("/{user_id}/items", response_model=QuantityChangeOut)
def change_quantity(
    user_id: str,
    payload: QuantityChangeIn,
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    """Konflikt restauracji to nie blad: status "conflict" i nic nie zmienione."""
    svc = get_service(db, mirror)
    try:
        return svc.change_quantity(
            user_id=user_id,
            restaurant_id=payload.restaurant_id,
            menu_item_id=payload.menu_item_id,
            delta=payload.delta,
        )
    except ValidationError as e:
        raise validation_http_error(e)
    except StoreError as e:
        raise store_http_error(e)


@router.delete("/{user_id}/items/{menu_item_id}", response_model=QuantityChangeOut)
def remove_item(
    user_id: str,
    menu_item_id: str,
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        return svc.remove_item(user_id, menu_item_id)
    except StoreError as e:
        raise store_http_error(e)


@router.post("/{user_id}/replace", response_model=CartOut)
def replace_cart(
    user_id: str,
    payload: ReplaceCartIn,
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        return svc.replace_cart(
            user_id=user_id,
            restaurant_id=payload.restaurant_id,
            menu_item_id=payload.menu_item_id,
            quantity=payload.quantity,
        )
    except ValidationError as e:
        raise validation_http_error(e)
    except StoreError as e:
        raise store_http_error(e)


@router.post("/{user_id}/refresh", response_model=CartOut)
def refresh_cart(
    user_id: str,
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        svc.refresh(user_id)
        return svc.get_cart(user_id)
    except StoreError as e:
        raise store_http_error(e)
