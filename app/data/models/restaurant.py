#app/data/models/restaurant.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, Float, Boolean, DateTime, Text

from app.data.database import Base


class RestaurantModel(Base):
    __tablename__ = "restaurants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    rating = Column(Numeric(3, 2), nullable=False, default=0)
    delivery_time_min = Column(Integer, nullable=False, default=30)
    delivery_time_max = Column(Integer, nullable=False, default=60)
    min_order_amount = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
