import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, BigInteger, Boolean, DateTime

from app.data.database import Base


class UserProfileModel(Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # klucz partycji, np. telegram_123456
    user_id = Column(String, nullable=False, unique=True)
    telegram_id = Column(BigInteger, nullable=True, unique=True)
    telegram_username = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    language_code = Column(String(16), nullable=True)
    is_premium = Column(Boolean, nullable=False, default=False)
    role = Column(String, nullable=False, default="user")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
