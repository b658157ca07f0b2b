import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.domain.order_status import OrderStatus


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    restaurant_id = Column(String(36), ForeignKey("restaurants.id"), nullable=False)

    # pending, confirmed, preparing, ready, delivering, completed, cancelled
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)
    total_amount = Column(Numeric(10, 2), nullable=False)
    delivery_address = Column(String, nullable=True)
    delivery_instructions = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    restaurant = relationship("RestaurantModel", lazy="joined")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
