"""SQLAlchemy models for user accounts and profiles."""

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import expression

from city_sentinel.infrastructure.database import Base
from city_sentinel.utils import now_in_app_naive_datetime


class UserAccountModel(Base):
    """Identity directory entry; owns the login email of each user."""

    __tablename__ = "user_accounts"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class ProfileModel(Base):
    """Public profile and notification preferences of a user."""

    __tablename__ = "profiles"

    user_id = Column(String(36), primary_key=True)
    full_name = Column(String(120), nullable=True)
    notification_email = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime, nullable=True, onupdate=now_in_app_naive_datetime
    )


__all__ = ["ProfileModel", "UserAccountModel"]
