"""Schemas for user notification preferences."""

from pydantic import BaseModel


class NotificationPreferencesUpdate(BaseModel):
    notification_email: bool


class NotificationPreferencesRead(BaseModel):
    user_id: str
    notification_email: bool


__all__ = ["NotificationPreferencesRead", "NotificationPreferencesUpdate"]
