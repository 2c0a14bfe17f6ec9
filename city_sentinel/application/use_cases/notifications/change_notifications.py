"""Fan out an issue status or verification change to interested users."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from city_sentinel.config import Settings, get_settings
from city_sentinel.domain.entities import (
    ChangeEvent,
    EmailSendAttempt,
    IssueSnapshot,
    OrchestrationSummary,
    RecipientTarget,
)
from city_sentinel.infrastructure.database import EntityStoreUnavailableError
from city_sentinel.infrastructure.email import send_email
from city_sentinel.infrastructure.repositories import (
    IssueFollowRepository,
    IssueRepository,
    NotificationRepository,
    ProfileRepository,
    UserAccountRepository,
)

from .dispatcher import EmailDispatcher, EmailSender
from .recipients import RecipientResolver
from .writer import NotificationWriteError, NotificationWriter

logger = logging.getLogger(__name__)


class IssueNotFoundError(LookupError):
    """Raised when the issue referenced by a change event does not exist."""

    def __init__(self, issue_id: str) -> None:
        super().__init__(f"Issue {issue_id} not found")
        self.issue_id = issue_id


class IssueSource(Protocol):
    def get_snapshot(self, issue_id: str) -> IssueSnapshot | None: ...


class ChangeNotificationOrchestrator:
    """Run resolver, writer and dispatcher for one change event.

    Only the initial issue lookup may fail the run. Everything afterwards is
    best effort: failures are logged and reflected in the returned counts.
    Notification writes run on the calling thread; email submissions run on
    a small thread pool and each is awaited for at most ``send_timeout``
    seconds. Sends still in flight when the run returns are left to finish.
    """

    def __init__(
        self,
        *,
        issues: IssueSource,
        resolver: RecipientResolver,
        writer: NotificationWriter,
        dispatcher_factory: Callable[[], EmailDispatcher],
        max_workers: int = 4,
        send_timeout: float | None = 5.0,
    ) -> None:
        self._issues = issues
        self._resolver = resolver
        self._writer = writer
        self._dispatcher_factory = dispatcher_factory
        self._max_workers = max_workers
        self._send_timeout = send_timeout

    def notify(self, event: ChangeEvent) -> OrchestrationSummary:
        issue = self._fetch_issue(event.issue_id)
        logger.info(
            "Processing %s change for issue %s: %s -> %s",
            event.kind,
            issue.id,
            event.old_value,
            event.new_value,
        )

        targets = self._resolver.resolve(issue)
        if not targets:
            logger.info("Issue %s has no reporter or followers to notify", issue.id)
            return OrchestrationSummary()

        dispatcher = self._dispatcher_factory()
        notifications_created = 0
        pending: list[tuple[RecipientTarget, Future[EmailSendAttempt]]] = []
        executor: ThreadPoolExecutor | None = None
        try:
            for target in targets:
                if self._write(event, issue, target):
                    notifications_created += 1

                try:
                    prepared = dispatcher.prepare(event, issue, target)
                except Exception:
                    logger.exception(
                        "Could not render email for user %s on issue %s", target.user_id, issue.id
                    )
                    continue
                if prepared is None:
                    continue

                if executor is None:
                    executor = ThreadPoolExecutor(
                        max_workers=self._max_workers, thread_name_prefix="change-email"
                    )
                pending.append((target, executor.submit(dispatcher.send, prepared)))

            emails_sent = self._collect(issue, pending)
        finally:
            if executor is not None:
                executor.shutdown(wait=False)

        logger.info(
            "Notifications created: %s, Emails sent: %s", notifications_created, emails_sent
        )
        return OrchestrationSummary(
            notifications_created=notifications_created, emails_sent=emails_sent
        )

    def _fetch_issue(self, issue_id: str) -> IssueSnapshot:
        try:
            issue = self._issues.get_snapshot(issue_id)
        except SQLAlchemyError as exc:
            logger.error("Entity store unavailable while loading issue %s: %s", issue_id, exc)
            raise EntityStoreUnavailableError("Entity store is not reachable") from exc
        if issue is None:
            logger.error("Issue not found: %s", issue_id)
            raise IssueNotFoundError(issue_id)
        return issue

    def _write(self, event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget) -> bool:
        try:
            self._writer.write(event, issue, target)
        except NotificationWriteError as exc:
            logger.error("%s: %s", exc, exc.__cause__)
            return False
        return True

    def _collect(
        self,
        issue: IssueSnapshot,
        pending: list[tuple[RecipientTarget, Future[EmailSendAttempt]]],
    ) -> int:
        sent = 0
        for target, future in pending:
            try:
                attempt = future.result(timeout=self._send_timeout)
            except FutureTimeoutError:
                logger.warning(
                    "Timed out waiting for the email to user %s on issue %s",
                    target.user_id,
                    issue.id,
                )
                continue
            if attempt.delivered:
                sent += 1
            else:
                logger.warning(
                    "Email to user %s on issue %s was not delivered: %s",
                    target.user_id,
                    issue.id,
                    attempt.error,
                )
        return sent


def build_change_notification_orchestrator(
    session: Session,
    *,
    settings: Settings | None = None,
    sender: EmailSender | None = None,
) -> ChangeNotificationOrchestrator:
    """Wire the orchestrator to the SQLAlchemy repositories of ``session``."""

    settings = settings or get_settings()
    return ChangeNotificationOrchestrator(
        issues=IssueRepository(session),
        resolver=RecipientResolver(
            followers=IssueFollowRepository(session),
            profiles=ProfileRepository(session),
            directory=UserAccountRepository(session),
        ),
        writer=NotificationWriter(NotificationRepository(session)),
        dispatcher_factory=lambda: EmailDispatcher(
            sender or send_email, enabled=settings.email_enabled
        ),
        max_workers=settings.notification_max_workers,
        send_timeout=settings.email_send_timeout_seconds,
    )


def notify_issue_change(session: Session, event: ChangeEvent) -> OrchestrationSummary:
    """Notify the reporter and followers of ``event.issue_id`` about ``event``."""

    return build_change_notification_orchestrator(session).notify(event)


__all__ = [
    "ChangeNotificationOrchestrator",
    "IssueNotFoundError",
    "build_change_notification_orchestrator",
    "notify_issue_change",
]
