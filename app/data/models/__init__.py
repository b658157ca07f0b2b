#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.restaurant import RestaurantModel
from app.data.models.menu_item import MenuItemModel
from app.data.models.cart_item import CartItemModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.data.models.order_status_history import OrderStatusHistoryModel
from app.data.models.user import UserProfileModel

__all__ = [
    "RestaurantModel",
    "MenuItemModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "OrderStatusHistoryModel",
    "UserProfileModel",
]
