"""Email delivery of issue change notifications."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from city_sentinel.domain.entities import (
    ChangeEvent,
    EmailSendAttempt,
    IssueSnapshot,
    RecipientTarget,
)

from .email_templates import render_email

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], EmailSendAttempt]


@dataclass(frozen=True)
class PreparedEmail:
    """An email whose recipient address has been reserved for this run."""

    user_id: str
    recipient: str
    subject: str
    html: str


class EmailDispatcher:
    """Render and submit change emails, at most one per address per run.

    A dispatcher instance lives for a single notification run. ``prepare``
    performs the preference checks and reserves the recipient address under a
    lock, so it is safe to call from several threads; ``send`` only performs
    the provider call.
    """

    def __init__(self, sender: EmailSender, *, enabled: bool) -> None:
        self._sender = sender
        self._enabled = enabled
        self._reserved: set[str] = set()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def reserve(self, address: str) -> bool:
        """Claim ``address`` for this run; ``False`` if it was already claimed."""

        key = address.strip().lower()
        with self._lock:
            if key in self._reserved:
                return False
            self._reserved.add(key)
            return True

    def prepare(
        self, event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget
    ) -> PreparedEmail | None:
        if not self._enabled:
            return None
        if not target.email or not target.wants_email:
            return None
        if not self.reserve(target.email):
            logger.info(
                "Skipping duplicate email to %s for issue %s (user %s)",
                target.email,
                issue.id,
                target.user_id,
            )
            return None

        rendered = render_email(event, issue, target)
        return PreparedEmail(
            user_id=target.user_id,
            recipient=target.email,
            subject=rendered.subject,
            html=rendered.html,
        )

    def send(self, prepared: PreparedEmail) -> EmailSendAttempt:
        try:
            attempt = self._sender(prepared.subject, prepared.html, prepared.recipient)
        except Exception as exc:
            logger.exception(
                "Error sending email to user %s at %s", prepared.user_id, prepared.recipient
            )
            return EmailSendAttempt(
                recipient=prepared.recipient,
                subject=prepared.subject,
                html=prepared.html,
                error=str(exc),
            )
        if attempt.delivered:
            logger.info("Email sent to user %s at %s", prepared.user_id, prepared.recipient)
        return attempt

    def dispatch(
        self, event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget
    ) -> EmailSendAttempt | None:
        """Prepare and send in one step; ``None`` when no email applies."""

        prepared = self.prepare(event, issue, target)
        if prepared is None:
            return None
        return self.send(prepared)


__all__ = ["EmailDispatcher", "EmailSender", "PreparedEmail"]
