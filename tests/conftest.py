import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")

from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_mirror
from app.data.database import Base, get_db
from app.data import models  # noqa: F401
from app.data.models import RestaurantModel, MenuItemModel
from app.main import create_app
from app.services.cart_mirror import CartMirror
from app.services.notification_service import NotificationService

USER = "telegram_1001"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def mirror(redis_client):
    return CartMirror(client=redis_client)


@pytest.fixture()
def notifications(monkeypatch):
    sent = []
    monkeypatch.setattr(
        NotificationService,
        "send_order_notification",
        staticmethod(lambda user_id, order_id: sent.append((user_id, order_id))),
    )
    return sent


@pytest.fixture()
def catalog(db):
    """
    R: X (100), Y (50), U (niedostepna)
    B: Z (70)
    C: nieaktywna, pozycja C (30)
    """
    r = RestaurantModel(id="rest-r", name="Restauracja R", rating=Decimal("4.5"))
    b = RestaurantModel(id="rest-b", name="Restauracja B", rating=Decimal("4.9"))
    c = RestaurantModel(id="rest-c", name="Zamknieta", rating=Decimal("5.0"), is_active=False)
    db.add_all([r, b, c])
    db.flush()
    db.add_all(
        [
            MenuItemModel(id="item-x", restaurant_id="rest-r", name="X", price=Decimal("100.00"), category="Pizza"),
            MenuItemModel(id="item-y", restaurant_id="rest-r", name="Y", price=Decimal("50.00"), category="Desery"),
            MenuItemModel(
                id="item-u",
                restaurant_id="rest-r",
                name="U",
                price=Decimal("10.00"),
                category="Napoje",
                is_available=False,
            ),
            MenuItemModel(id="item-z", restaurant_id="rest-b", name="Z", price=Decimal("70.00")),
            MenuItemModel(id="item-c", restaurant_id="rest-c", name="C", price=Decimal("30.00")),
        ]
    )
    db.commit()
    return {"r": r, "b": b, "c": c}


@pytest.fixture()
def client(session_factory, mirror, catalog, notifications):
    app = create_app()

    def override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_mirror] = lambda: mirror
    return TestClient(app)
