# app/services/order_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.errors import (
    StoreError,
    ValidationError,
    CART_EMPTY,
    MIXED_RESTAURANTS,
    ACTIVE_ORDER,
    ORDER_NOT_FOUND,
    ORDER_NOT_CANCELLABLE,
)
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.cart_mirror import CartMirror
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Składanie zamówienia to saga bez transakcji między krokami:
    create order -> create order lines -> clear cart.
    """

    def __init__(
        self,
        db: Session,
        mirror: CartMirror,
        notification_service: NotificationService | None = None,
    ):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.mirror = mirror
        self.notification_service = notification_service or NotificationService()

    def submit_order(
        self,
        user_id: str,
        delivery_address: str | None = None,
        delivery_instructions: str | None = None,
    ):
        """
        Use Case: Złożenie zamówienia z koszyka.

        Warunki (każdy zatrzymuje bez zmian w bazie):
        1. koszyk nie jest pusty
        2. wszystkie pozycje z jednej restauracji
        3. brak zamówienia w toku

        Kroki:
        1. zamówienie z totalem (błąd -> koszyk nietknięty)
        2. pozycje zamówienia z aktualną ceną (błąd -> zamówienie bez pozycji zostaje)
        3. czyszczenie koszyka (błąd -> tylko log, zamówienie jest poprawne)
        4. powiadomienie
        """
        # snapshot koszyka z bazy, nie z mirrora
        lines = self.cart_repo.get_cart(user_id)

        if not lines:
            raise ValidationError(CART_EMPTY, "Koszyk jest pusty")

        restaurant_ids = {line.restaurant_id for line in lines}
        if len(restaurant_ids) > 1:
            raise ValidationError(
                MIXED_RESTAURANTS,
                "Koszyk zawiera pozycje z różnych restauracji",
            )

        active = self.repo.get_active_order(user_id)
        if active:
            raise ValidationError(
                ACTIVE_ORDER,
                f"Zamówienie {active.id} jest w toku ({active.status})",
            )

        restaurant_id = restaurant_ids.pop()
        order_lines = [
            {
                "menu_item_id": line.menu_item_id,
                "quantity": line.quantity,
                "price": line.menu_item.price,
            }
            for line in lines
        ]
        total = sum((l["price"] * l["quantity"] for l in order_lines), Decimal("0.00"))

        # krok 1
        order = self.repo.create_order(
            user_id=user_id,
            restaurant_id=restaurant_id,
            total_amount=total,
            delivery_address=delivery_address,
            delivery_instructions=delivery_instructions,
        )
        logger.info(f"Order {order.id} created for {user_id}, total {total}")

        # krok 2
        try:
            self.repo.add_order_lines(order.id, order_lines)
        except StoreError as e:
            logger.error(f"Order {order.id} zostal bez pozycji: {e}")
            e.order_id = order.id
            raise

        # krok 3
        cart_cleared = True
        try:
            self.cart_repo.clear_cart(user_id)
        except StoreError as e:
            cart_cleared = False
            logger.warning(f"Nie udalo sie wyczyscic koszyka {user_id} po zamowieniu {order.id}: {e}")

        if cart_cleared:
            try:
                self.mirror.clear(user_id)
            except StoreError as e:
                # mirror poprawi nastepny refresh
                logger.warning(f"Nie udalo sie wyczyscic mirrora {user_id}: {e}")

        # krok 4
        self.notification_service.send_order_notification(user_id, order.id)

        result = self._to_dict(self.repo.get_order(order.id))
        result["cart_cleared"] = cart_cleared
        return result

    def get_order(self, order_id: str, user_id: str):
        """
        Use Case: Pobranie zamówienia (Query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise ValidationError(ORDER_NOT_FOUND, "Zamówienie nie istnieje")

        if order.user_id != user_id:
            raise PermissionError("Brak dostępu do zamówienia")

        return self._to_dict(order)

    def list_orders(self, user_id: str):
        return [self._to_dict(order) for order in self.repo.list_orders(user_id)]

    def get_status_history(self, order_id: str, user_id: str):
        self.get_order(order_id, user_id)
        return [
            {"status": h.status, "changed_by": h.changed_by, "created_at": h.created_at}
            for h in self.repo.get_status_history(order_id)
        ]

    def cancel_order(self, order_id: str, user_id: str):
        """
        Use Case: Anulowanie zamówienia przez użytkownika, tylko w statusie pending.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise ValidationError(ORDER_NOT_FOUND, "Zamówienie nie istnieje")

        if order.user_id != user_id:
            raise PermissionError("Brak dostępu do zamówienia")

        rowcount = self.repo.cancel_if_pending(order_id, changed_by=user_id)
        if rowcount == 0:
            raise ValidationError(
                ORDER_NOT_CANCELLABLE,
                "Można anulować tylko zamówienie oczekujące (pending)",
            )

        logger.info(f"Order {order_id} cancelled by {user_id}")
        return self._to_dict(self.repo.get_order(order_id))

    @staticmethod
    def _to_dict(order: OrderModel):
        return {
            "id": order.id,
            "user_id": order.user_id,
            "restaurant_id": order.restaurant_id,
            "restaurant_name": order.restaurant.name if order.restaurant else None,
            "status": order.status,
            "total_amount": order.total_amount,
            "delivery_address": order.delivery_address,
            "delivery_instructions": order.delivery_instructions,
            "items": [
                {
                    "menu_item_id": item.menu_item_id,
                    "quantity": item.quantity,
                    "price": item.price,
                }
                for item in order.items
            ],
            "created_at": order.created_at,
        }
