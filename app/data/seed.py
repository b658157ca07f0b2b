# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal, Base, engine
from app.data.models import RestaurantModel, MenuItemModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

RESTAURANTS = [
    {
        "name": "Pizzeria Napoli",
        "address": "ul. Marszalkowska 10",
        "rating": Decimal("4.8"),
        "delivery_time_min": 25,
        "delivery_time_max": 40,
        "min_order_amount": Decimal("300.00"),
        "menu": [
            ("Margherita", Decimal("450.00"), "Pizza"),
            ("Pepperoni", Decimal("520.00"), "Pizza"),
            ("Tiramisu", Decimal("250.00"), "Desery"),
        ],
    },
    {
        "name": "Sushi Bar Kioto",
        "address": "ul. Nowy Swiat 5",
        "rating": Decimal("4.6"),
        "delivery_time_min": 35,
        "delivery_time_max": 55,
        "min_order_amount": Decimal("500.00"),
        "menu": [
            ("Filadelfia", Decimal("690.00"), "Rolls"),
            ("Kalifornia", Decimal("590.00"), "Rolls"),
            ("Miso", Decimal("220.00"), "Zupy"),
        ],
    },
]


def seed(db=None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        # tylko jesli pusto
        if db.query(RestaurantModel).first():
            return 0
        for data in RESTAURANTS:
            data = dict(data)
            menu = data.pop("menu")
            restaurant = RestaurantModel(**data)
            db.add(restaurant)
            db.flush()
            for name, price, category in menu:
                db.add(MenuItemModel(restaurant_id=restaurant.id, name=name, price=price, category=category))
        db.commit()
        logger.info(f"Seeded {len(RESTAURANTS)} restaurants")
        return len(RESTAURANTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    seed()
