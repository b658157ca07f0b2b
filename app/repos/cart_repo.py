# app/repos/cart_repo.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import select, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel
from app.domain.errors import ValidationError, INVALID_QUANTITY
from app.repos.base import BaseRepo


def _dialect_insert(db: Session):
    # ON CONFLICT jest w dialektach, nie w core insert
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert
    return postgresql.insert


class CartRepo(BaseRepo):
    """
    Dostep do linii koszyka, klucz (user_id, menu_item_id).
    Kazda metoda to osobny commit, nie ma transakcji miedzy wywolaniami.
    """

    def get_cart(self, user_id: str) -> list[CartItemModel]:
        #brak wierszy to pusta lista, nie blad
        with self.store_op("get_cart"):
            stmt = (
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.created_at.desc())
                .execution_options(populate_existing=True)
            )
            return list(self.db.execute(stmt).unique().scalars().all())

    def get_line(self, user_id: str, menu_item_id: str) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.user_id == user_id,
            CartItemModel.menu_item_id == menu_item_id,
        ).execution_options(populate_existing=True)
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def upsert_line(self, user_id: str, menu_item_id: str, restaurant_id: str, quantity: int) -> CartItemModel:
        # zero -> delete_line, nie upsert
        if quantity <= 0:
            raise ValidationError(INVALID_QUANTITY, "Ilosc musi byc wieksza niz 0")

        with self.store_op("upsert_line"):
            # jeden INSERT .. ON CONFLICT, przy wyscigu wygrywa ostatni zapis
            now = datetime.now(timezone.utc)
            stmt = _dialect_insert(self.db)(CartItemModel).values(
                id=str(uuid.uuid4()),
                user_id=user_id,
                menu_item_id=menu_item_id,
                restaurant_id=restaurant_id,
                quantity=quantity,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "menu_item_id"],
                set_={
                    "quantity": stmt.excluded.quantity,
                    "restaurant_id": stmt.excluded.restaurant_id,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            self.db.execute(stmt)
            self.db.commit()
            return self.get_line(user_id, menu_item_id)

    def delete_line(self, user_id: str, menu_item_id: str) -> int:
        with self.store_op("delete_line"):
            res = self.db.execute(
                delete(CartItemModel).where(
                    CartItemModel.user_id == user_id,
                    CartItemModel.menu_item_id == menu_item_id,
                )
            )
            self.db.commit()
            return res.rowcount

    def delete_line_by_id(self, user_id: str, line_id: str) -> int:
        with self.store_op("delete_line"):
            res = self.db.execute(
                delete(CartItemModel).where(
                    CartItemModel.user_id == user_id,
                    CartItemModel.id == line_id,
                )
            )
            self.db.commit()
            return res.rowcount

    def clear_cart(self, user_id: str) -> int:
        with self.store_op("clear_cart"):
            res = self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
            self.db.commit()
            return res.rowcount
