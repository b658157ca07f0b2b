#app/data/models/menu_item.py
import uuid

from sqlalchemy import Column, String, Numeric, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.data.database import Base


class MenuItemModel(Base):
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(String(36), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String, nullable=True)
    category = Column(String, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)

    restaurant = relationship("RestaurantModel")
