"""Domain entity describing who receives a change notification."""

from dataclasses import dataclass

RECIPIENT_ROLE_OWNER = "owner"
RECIPIENT_ROLE_FOLLOWER = "follower"


@dataclass(frozen=True)
class RecipientTarget:
    """A user that must be told about an issue change."""

    user_id: str
    role: str
    email: str | None = None
    wants_email: bool = True

    @property
    def is_owner(self) -> bool:
        return self.role == RECIPIENT_ROLE_OWNER


__all__ = ["RecipientTarget", "RECIPIENT_ROLE_OWNER", "RECIPIENT_ROLE_FOLLOWER"]
