"""Domain entities produced while delivering change notifications."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EmailSendAttempt:
    """Outcome of submitting one email to the provider. Never persisted."""

    recipient: str
    subject: str
    html: str
    delivered: bool = False
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class OrchestrationSummary:
    """Counts reported back to the caller of a notification run."""

    notifications_created: int = 0
    emails_sent: int = 0


__all__ = ["EmailSendAttempt", "OrchestrationSummary"]
