# app/domain/errors.py


class ValidationError(ValueError):
    """
    Blad walidacji wykryty lokalnie, przed jakakolwiek zmiana w bazie.
    reason to stabilny kod dla klienta (np. cart_empty, active_order).
    """

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class StoreError(RuntimeError):
    """
    Pojedyncza operacja na bazie nie powiodla sie.
    step mowi, ktory krok sagi padl, order_id jest ustawione gdy zamowienie
    zostalo juz utworzone.
    """

    def __init__(self, step: str, message: str, order_id: str | None = None):
        super().__init__(message)
        self.step = step
        self.order_id = order_id


# kody walidacji
CART_EMPTY = "cart_empty"
MIXED_RESTAURANTS = "mixed_restaurants"
ACTIVE_ORDER = "active_order"
INVALID_QUANTITY = "invalid_quantity"
UNKNOWN_MENU_ITEM = "unknown_menu_item"
ORDER_NOT_FOUND = "order_not_found"
ORDER_NOT_CANCELLABLE = "order_not_cancellable"
