# app/repos/base.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import StoreError
from app.utils.logging import get_logger

logger = get_logger(__name__)


class BaseRepo:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def store_op(self, step: str):
        """Kazdy blad SQLAlchemy -> rollback sesji i StoreError z nazwa kroku."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"Blad bazy w kroku {step}: {e}")
            self.db.rollback()
            raise StoreError(step, f"Operacja {step} nie powiodla sie") from e
