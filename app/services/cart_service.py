from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from app.domain.errors import (
    StoreError,
    ValidationError,
    INVALID_QUANTITY,
    UNKNOWN_MENU_ITEM,
)
from app.repos.cart_repo import CartRepo
from app.repos.catalog_repo import CatalogRepo
from app.services.cart_mirror import CartMirror
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka na dwoch warstwach stanu:
    - baza (CartRepo) jest zrodlem prawdy
    - mirror w redisie, aktualizowany optymistycznie przed zapisem do bazy

    Zasada: w koszyku tylko pozycje z jednej restauracji. Dodanie pozycji
    z innej restauracji nic nie zmienia, tylko zwraca konflikt do rozstrzygniecia
    (replace_cart albo porzucenie dodania).
    """

    def __init__(self, db: Session, mirror: CartMirror):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.mirror = mirror

    #query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        self._ensure_mirror(user_id)
        mirrored = self.mirror.lines(user_id)
        menu_items = self.catalog.get_menu_items_by_ids(mirrored.keys())

        lines = []
        for menu_item_id, line in mirrored.items():
            item = menu_items.get(menu_item_id)
            if item is None:
                # pozycja zniknela z menu, nastepny refresh ja usunie
                logger.warning(f"Pozycja {menu_item_id} z koszyka {user_id} nie istnieje w menu")
                continue
            lines.append(
                {
                    "menu_item_id": menu_item_id,
                    "restaurant_id": line["restaurant_id"],
                    "name": item.name,
                    "price": item.price,
                    "quantity": line["quantity"],
                    "subtotal": item.price * line["quantity"],
                }
            )
        lines.sort(key=lambda l: l["name"])

        restaurant_ids = {l["restaurant_id"] for l in lines}
        return {
            "user_id": user_id,
            "items": lines,
            "total": sum((l["subtotal"] for l in lines), Decimal("0.00")),
            "restaurant_id": next(iter(restaurant_ids)) if len(restaurant_ids) == 1 else None,
            "mixed": len(restaurant_ids) > 1,
        }

    def total(self, user_id: str) -> Decimal:
        return self.get_cart(user_id)["total"]

    #commands
    def change_quantity(
        self,
        user_id: str,
        restaurant_id: str,
        menu_item_id: str,
        delta: int,
    ) -> Dict[str, Any]:
        self._ensure_mirror(user_id)

        previous = self.mirror.get_line(user_id, menu_item_id)
        current = previous["quantity"] if previous else 0
        new_quantity = max(0, current + delta)

        if new_quantity == current:
            return {"status": "ok", "menu_item_id": menu_item_id, "quantity": current}

        if new_quantity > current:
            other = self.mirror.restaurant_ids(user_id) - {restaurant_id}
            if other:
                logger.info(
                    f"Konflikt restauracji w koszyku {user_id}: jest {sorted(other)}, "
                    f"dodawana pozycja {menu_item_id} z {restaurant_id}"
                )
                return {
                    "status": "conflict",
                    "menu_item_id": menu_item_id,
                    "quantity": current,
                    "conflict": {
                        "menu_item_id": menu_item_id,
                        "pending_quantity": new_quantity,
                        "restaurant_id": restaurant_id,
                        "cart_restaurant_ids": sorted(other),
                    },
                }
            self._check_menu_item(restaurant_id, menu_item_id)

        line_restaurant_id = previous["restaurant_id"] if previous else restaurant_id

        # optymistycznie: najpierw mirror, potem baza
        if new_quantity == 0:
            self.mirror.remove_line(user_id, menu_item_id)
        else:
            self.mirror.set_line(user_id, menu_item_id, line_restaurant_id, new_quantity)

        try:
            if new_quantity == 0:
                self.repo.delete_line(user_id, menu_item_id)
            else:
                self.repo.upsert_line(user_id, menu_item_id, line_restaurant_id, new_quantity)
        except StoreError:
            logger.error(f"Zapis pozycji {menu_item_id} nie powiodl sie, cofam mirror do {current}")
            if previous:
                self.mirror.set_line(user_id, menu_item_id, previous["restaurant_id"], current)
            else:
                self.mirror.remove_line(user_id, menu_item_id)
            raise

        logger.info(f"Koszyk {user_id}: pozycja {menu_item_id} {current} -> {new_quantity}")
        return {"status": "ok", "menu_item_id": menu_item_id, "quantity": new_quantity}

    def remove_item(self, user_id: str, menu_item_id: str) -> Dict[str, Any]:
        self._ensure_mirror(user_id)
        line = self.mirror.get_line(user_id, menu_item_id)
        if not line:
            return {"status": "ok", "menu_item_id": menu_item_id, "quantity": 0}
        return self.change_quantity(user_id, line["restaurant_id"], menu_item_id, -line["quantity"])

    def replace_cart(
        self,
        user_id: str,
        restaurant_id: str,
        menu_item_id: str,
        quantity: int,
    ) -> Dict[str, Any]:
        """
        Rozstrzygniecie konfliktu "zastap koszyk": clear + upsert + refresh.
        Nie jest atomowe: jesli upsert padnie po clear, koszyk zostaje pusty.
        """
        if quantity <= 0:
            raise ValidationError(INVALID_QUANTITY, "Ilosc musi byc wieksza niz 0")
        self._check_menu_item(restaurant_id, menu_item_id)

        self.repo.clear_cart(user_id)
        logger.info(f"Koszyk {user_id} wyczyszczony, zastepowany pozycja {menu_item_id}")
        try:
            self.repo.upsert_line(user_id, menu_item_id, restaurant_id, quantity)
        except StoreError:
            # mirror i tak odswiezamy, ale na zewnatrz idzie blad upsertu
            try:
                self.refresh(user_id)
            except StoreError as refresh_error:
                logger.error(f"Refresh koszyka {user_id} po nieudanym upsercie nie powiodl sie: {refresh_error}")
            raise
        self.refresh(user_id)

        return self.get_cart(user_id)

    def refresh(self, user_id: str) -> Dict[str, Dict]:
        """Czyta koszyk z bazy i podmienia caly mirror."""
        rows = self.repo.get_cart(user_id)
        lines = {
            row.menu_item_id: {"restaurant_id": row.restaurant_id, "quantity": row.quantity}
            for row in rows
        }
        self.mirror.replace(user_id, lines)
        logger.info(f"Mirror koszyka {user_id} odswiezony ({len(lines)} pozycji)")
        return lines

    def _ensure_mirror(self, user_id: str) -> None:
        if not self.mirror.exists(user_id):
            self.refresh(user_id)

    def _check_menu_item(self, restaurant_id: str, menu_item_id: str) -> None:
        item = self.catalog.get_menu_item(menu_item_id)
        if item is None or item.restaurant_id != restaurant_id:
            raise ValidationError(UNKNOWN_MENU_ITEM, "Pozycja nie istnieje w menu tej restauracji")
        if not item.is_available:
            raise ValidationError(UNKNOWN_MENU_ITEM, "Pozycja jest niedostepna")
        if item.restaurant is None or not item.restaurant.is_active:
            raise ValidationError(UNKNOWN_MENU_ITEM, "Restauracja jest nieaktywna")
