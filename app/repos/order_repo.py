# app/repos/order_repo.py
from decimal import Decimal

from sqlalchemy import select, update

from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.data.models.order_status_history import OrderStatusHistoryModel
from app.domain.order_status import OrderStatus, ACTIVE_STATUSES
from app.repos.base import BaseRepo


class OrderRepo(BaseRepo):

    def get_order(self, order_id: str) -> OrderModel | None:
        with self.store_op("get_order"):
            return self.db.get(OrderModel, order_id, populate_existing=True)

    def list_orders(self, user_id: str) -> list[OrderModel]:
        with self.store_op("list_orders"):
            stmt = (
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
                .execution_options(populate_existing=True)
            )
            return list(self.db.execute(stmt).unique().scalars().all())

    def get_active_order(self, user_id: str) -> OrderModel | None:
        with self.store_op("get_active_order"):
            stmt = (
                select(OrderModel)
                .where(
                    OrderModel.user_id == user_id,
                    OrderModel.status.in_([s.value for s in ACTIVE_STATUSES]),
                )
                .order_by(OrderModel.created_at.desc())
                .limit(1)
            )
            return self.db.execute(stmt).unique().scalar_one_or_none()

    def create_order(
        self,
        user_id: str,
        restaurant_id: str,
        total_amount: Decimal,
        delivery_address: str | None = None,
        delivery_instructions: str | None = None,
    ) -> OrderModel:
        with self.store_op("create_order"):
            order = OrderModel(
                user_id=user_id,
                restaurant_id=restaurant_id,
                total_amount=total_amount,
                status=OrderStatus.PENDING.value,
                delivery_address=delivery_address,
                delivery_instructions=delivery_instructions,
            )
            self.db.add(order)
            self.db.flush()
            self.db.add(
                OrderStatusHistoryModel(
                    order_id=order.id,
                    status=OrderStatus.PENDING.value,
                    changed_by=user_id,
                )
            )
            self.db.commit()
            self.db.refresh(order)
            return order

    def add_order_lines(self, order_id: str, lines: list[dict]) -> list[OrderItemModel]:
        """lines: [{"menu_item_id", "quantity", "price"}], jeden insert na wszystkie."""
        with self.store_op("create_order_lines"):
            items = [
                OrderItemModel(
                    order_id=order_id,
                    menu_item_id=line["menu_item_id"],
                    quantity=line["quantity"],
                    price=line["price"],
                )
                for line in lines
            ]
            self.db.add_all(items)
            self.db.commit()
            return items

    def cancel_if_pending(self, order_id: str, changed_by: str) -> int:
        # warunek na status, jak optimistic locking na wersji
        with self.store_op("cancel_order"):
            res = self.db.execute(
                update(OrderModel)
                .where(
                    OrderModel.id == order_id,
                    OrderModel.status == OrderStatus.PENDING.value,
                )
                .values(status=OrderStatus.CANCELLED.value)
                .execution_options(synchronize_session="fetch")
            )
            if res.rowcount == 0:
                self.db.rollback()
                return 0

            self.db.add(
                OrderStatusHistoryModel(
                    order_id=order_id,
                    status=OrderStatus.CANCELLED.value,
                    changed_by=changed_by,
                )
            )
            self.db.commit()
            return res.rowcount

    def get_status_history(self, order_id: str) -> list[OrderStatusHistoryModel]:
        with self.store_op("get_status_history"):
            stmt = (
                select(OrderStatusHistoryModel)
                .where(OrderStatusHistoryModel.order_id == order_id)
                .order_by(OrderStatusHistoryModel.created_at)
            )
            return list(self.db.execute(stmt).scalars().all())
