# app/celery_worker.py
from celery import Celery

from app.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CART_REFRESH_SECONDS

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski importowane explicite, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "app.tasks.refresh",
    "app.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "refresh-cart-mirrors": {
        "task": "app.tasks.refresh.refresh_cart_mirrors_task",
        "schedule": CART_REFRESH_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
