# app/repos/catalog_repo.py
from sqlalchemy import select

from app.data.models.restaurant import RestaurantModel
from app.data.models.menu_item import MenuItemModel
from app.repos.base import BaseRepo


class CatalogRepo(BaseRepo):
    """Tylko odczyt: restauracje i menu."""

    def list_active_restaurants(self) -> list[RestaurantModel]:
        with self.store_op("list_restaurants"):
            stmt = (
                select(RestaurantModel)
                .where(RestaurantModel.is_active.is_(True))
                .order_by(RestaurantModel.rating.desc(), RestaurantModel.name)
            )
            return list(self.db.execute(stmt).scalars().all())

    def get_restaurant(self, restaurant_id: str) -> RestaurantModel | None:
        with self.store_op("get_restaurant"):
            return self.db.get(RestaurantModel, restaurant_id)

    def get_menu_items(self, restaurant_id: str) -> list[MenuItemModel]:
        with self.store_op("get_menu_items"):
            stmt = (
                select(MenuItemModel)
                .where(
                    MenuItemModel.restaurant_id == restaurant_id,
                    MenuItemModel.is_available.is_(True),
                )
                .order_by(MenuItemModel.category.asc().nulls_last(), MenuItemModel.name)
            )
            return list(self.db.execute(stmt).scalars().all())

    def get_menu_item(self, menu_item_id: str) -> MenuItemModel | None:
        with self.store_op("get_menu_item"):
            return self.db.get(MenuItemModel, menu_item_id)

    def get_menu_items_by_ids(self, menu_item_ids) -> dict[str, MenuItemModel]:
        ids = list(menu_item_ids)
        if not ids:
            return {}
        with self.store_op("get_menu_items"):
            stmt = select(MenuItemModel).where(MenuItemModel.id.in_(ids))
            return {item.id: item for item in self.db.execute(stmt).scalars().all()}
