# app/tasks/refresh.py
from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.domain.errors import StoreError
from app.services.cart_mirror import CartMirror
from app.services.cart_service import CartService
from app.utils.logging import get_logger

logger = get_logger(__name__)


def refresh_cart_mirrors(db, mirror: CartMirror) -> int:
    """Odswieza wszystkie zywe mirrory z bazy. Zwraca liczbe odswiezonych."""
    service = CartService(db, mirror)
    refreshed = 0
    for user_id in mirror.user_ids():
        try:
            service.refresh(user_id)
            refreshed += 1
        except StoreError as e:
            logger.warning(f"Refresh koszyka {user_id} nie powiodl sie: {e}")
    return refreshed


@celery_app.task(name="app.tasks.refresh.refresh_cart_mirrors_task")
def refresh_cart_mirrors_task():
    logger.info("Refresh cart mirrors task started")

    db = SessionLocal()
    try:
        refreshed = refresh_cart_mirrors(db, CartMirror())
        logger.info(f"Refreshed {refreshed} cart mirrors")
        return refreshed
    finally:
        db.close()
