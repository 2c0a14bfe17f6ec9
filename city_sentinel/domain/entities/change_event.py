"""Domain entity describing a change in an issue's state."""

from __future__ import annotations

from dataclasses import dataclass

from .issue import ISSUE_STATUSES, VERIFICATION_STATUSES

EVENT_KIND_STATUS = "status"
EVENT_KIND_VERIFICATION = "verification"

_ALLOWED_VALUES = {
    EVENT_KIND_STATUS: ISSUE_STATUSES,
    EVENT_KIND_VERIFICATION: VERIFICATION_STATUSES,
}


@dataclass(frozen=True)
class ChangeEvent:
    """A single status or verification transition of an issue.

    ``old_value`` may be ``None`` for verification events because an issue
    starts without any verification state.
    """

    issue_id: str
    kind: str
    old_value: str | None
    new_value: str
    actor_name: str | None = None
    actor_role: str | None = None

    def __post_init__(self) -> None:
        allowed = _ALLOWED_VALUES.get(self.kind)
        if allowed is None:
            raise ValueError(f"Unknown change event kind '{self.kind}'")
        if self.new_value not in allowed:
            raise ValueError(f"'{self.new_value}' is not a valid {self.kind} value")
        if self.old_value is not None and self.old_value not in allowed:
            raise ValueError(f"'{self.old_value}' is not a valid {self.kind} value")
        if self.kind == EVENT_KIND_STATUS and self.old_value is None:
            raise ValueError("Status change events require the previous status")

    @property
    def notification_type(self) -> str:
        """Tag stored on notification records, e.g. ``status_resolved``."""

        return f"{self.kind}_{self.new_value}"


__all__ = [
    "ChangeEvent",
    "EVENT_KIND_STATUS",
    "EVENT_KIND_VERIFICATION",
]
