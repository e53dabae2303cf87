"""SQLAlchemy model for registered device push tokens."""

from sqlalchemy import Column, DateTime, Integer, String

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class PushTokenModel(Base):
    """A device token; the token string is unique across all users."""

    __tablename__ = "push_token"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(255), nullable=False, unique=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    platform = Column(String(20), nullable=False, default="unknown")
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    last_used_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["PushTokenModel"]
