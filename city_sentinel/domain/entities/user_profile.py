"""Domain entities for user contact and preference data."""

from dataclasses import dataclass


@dataclass
class UserProfile:
    """Notification preferences stored for a user."""

    user_id: str
    full_name: str | None = None
    notification_email: bool = True


__all__ = ["UserProfile"]
