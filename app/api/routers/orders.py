# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_mirror, validation_http_error, store_http_error
from app.data.database import get_db
from app.domain.errors import ValidationError, StoreError, ACTIVE_ORDER, ORDER_NOT_FOUND
from app.domain.schemas import OrderCreate, OrderOut, OrderStatusChangeOut
from app.services.cart_mirror import CartMirror
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, mirror: CartMirror):
    return OrderService(db, mirror)


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    """
    Składa zamówienie z koszyka użytkownika.
    Wysyła powiadomienie asynchronicznie.
    """
    svc = get_service(db, mirror)
    try:
        return svc.submit_order(
            payload.user_id,
            delivery_address=payload.delivery_address,
            delivery_instructions=payload.delivery_instructions,
        )
    except ValidationError as e:
        # aktywne zamowienie to konflikt stanu, reszta to zly request
        raise validation_http_error(e, 409 if e.reason == ACTIVE_ORDER else 400)
    except StoreError as e:
        raise store_http_error(e)


@router.get("/", response_model=List[OrderOut])
def list_orders(
    user_id: str = Query(...),
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        return svc.list_orders(user_id)
    except StoreError as e:
        raise store_http_error(e)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    """
    Pobiera szczegóły zamówienia.
    """
    svc = get_service(db, mirror)
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValidationError as e:
        raise validation_http_error(e, 404)
    except StoreError as e:
        raise store_http_error(e)


@router.post("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: str,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        return svc.cancel_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValidationError as e:
        raise validation_http_error(e, 404 if e.reason == ORDER_NOT_FOUND else 409)
    except StoreError as e:
        raise store_http_error(e)


@router.get("/{order_id}/history", response_model=List[OrderStatusChangeOut])
def get_order_history(
    order_id: str,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
    mirror: CartMirror = Depends(get_mirror),
):
    svc = get_service(db, mirror)
    try:
        return svc.get_status_history(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValidationError as e:
        raise validation_http_error(e, 404)
    except StoreError as e:
        raise store_http_error(e)
