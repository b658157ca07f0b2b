# app/api/deps.py
from functools import lru_cache

from fastapi import HTTPException

from app.domain.errors import ValidationError, StoreError
from app.services.cart_mirror import CartMirror


@lru_cache()
def get_mirror() -> CartMirror:
    return CartMirror()


def validation_http_error(e: ValidationError, status_code: int = 400) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"reason": e.reason, "message": str(e)})


def store_http_error(e: StoreError) -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={"step": e.step, "message": str(e), "order_id": e.order_id},
    )
