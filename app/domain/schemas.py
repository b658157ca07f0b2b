# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class TelegramUserIn(BaseModel):
    """Uzytkownik z Telegram WebApp initDataUnsafe.user."""

    id: int = Field(..., gt=0, description="Telegram user id")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = Field(None, max_length=16)
    is_premium: bool = False


class UserProfileOut(BaseModel):
    user_id: str
    telegram_id: int | None = None
    telegram_username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    language_code: str | None = None
    is_premium: bool = False
    role: str

    model_config = ConfigDict(from_attributes=True)


class RestaurantOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    rating: Decimal
    delivery_time_min: int
    delivery_time_max: int
    min_order_amount: Decimal
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class MenuItemOut(BaseModel):
    id: str
    restaurant_id: str
    name: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
    category: str | None = None
    is_available: bool

    model_config = ConfigDict(from_attributes=True)


class QuantityChangeIn(BaseModel):
    """Zmiana ilosci o delta (+1 / -1 z przyciskow)."""

    restaurant_id: str = Field(..., min_length=1)
    menu_item_id: str = Field(..., min_length=1)
    delta: int


class ReplaceCartIn(BaseModel):
    restaurant_id: str = Field(..., min_length=1)
    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, description="Ilosc (musi byc > 0)")


class CartConflictOut(BaseModel):
    menu_item_id: str
    pending_quantity: int
    restaurant_id: str
    cart_restaurant_ids: List[str]


class QuantityChangeOut(BaseModel):
    status: str  # ok | conflict
    menu_item_id: str
    quantity: int
    conflict: CartConflictOut | None = None


class CartLineOut(BaseModel):
    menu_item_id: str
    restaurant_id: str
    name: str
    price: Decimal
    quantity: int
    subtotal: Decimal


class CartOut(BaseModel):
    user_id: str
    items: List[CartLineOut]
    total: Decimal
    restaurant_id: str | None = None
    mixed: bool = False


class OrderCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    delivery_address: str | None = Field(None, max_length=500)
    delivery_instructions: str | None = Field(None, max_length=1000)


class OrderItemOut(BaseModel):
    menu_item_id: str
    quantity: int
    price: Decimal


class OrderOut(BaseModel):
    id: str
    user_id: str
    restaurant_id: str
    restaurant_name: str | None = None
    status: str
    total_amount: Decimal
    delivery_address: str | None = None
    delivery_instructions: str | None = None
    items: List[OrderItemOut]
    created_at: datetime
    cart_cleared: bool | None = None


class OrderStatusChangeOut(BaseModel):
    status: str
    changed_by: str | None = None
    created_at: datetime
