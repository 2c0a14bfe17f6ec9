"""Endpoints that change the state of an issue and manage its followers."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from city_sentinel.application.use_cases.issues import (
    follow_issue,
    is_following_issue,
    unfollow_issue,
    update_issue_status as update_issue_status_uc,
    update_issue_verification as update_issue_verification_uc,
)
from city_sentinel.application.use_cases.notifications import (
    IssueNotFoundError,
    notify_issue_change,
)
from city_sentinel.domain.entities import ChangeEvent, Issue
from city_sentinel.infrastructure.database import (
    EntityStoreUnavailableError,
    SessionLocal,
    get_db,
)
from city_sentinel.interfaces.api.schemas import (
    FollowStatus,
    IssueRead,
    IssueStatusUpdate,
    IssueVerificationUpdate,
)

router = APIRouter(prefix="/issues", tags=["issues"])
logger = logging.getLogger(__name__)


def _issue_to_read_model(issue: Issue) -> IssueRead:
    return IssueRead.model_validate(issue)


@router.patch("/{issue_id}/status", response_model=IssueRead)
def update_issue_status(
    issue_id: str,
    payload: IssueStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
) -> IssueRead:
    """Change the status of an issue and notify interested users afterwards."""

    try:
        issue, event = update_issue_status_uc(db, issue_id=issue_id, status=payload.status)
    except IssueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if event is not None:
        background_tasks.add_task(_notify_in_background, event)
    return _issue_to_read_model(issue)


@router.patch("/{issue_id}/verification", response_model=IssueRead)
def update_issue_verification(
    issue_id: str,
    payload: IssueVerificationUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
) -> IssueRead:
    """Record a verification decision and notify interested users afterwards."""

    try:
        issue, event = update_issue_verification_uc(
            db,
            issue_id=issue_id,
            verification_status=payload.verification_status,
            verified_by=payload.verified_by,
            verifier_name=payload.verifier_name,
            verifier_role=payload.verifier_role,
            notes=payload.notes,
        )
    except IssueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if event is not None:
        background_tasks.add_task(_notify_in_background, event)
    return _issue_to_read_model(issue)


@router.get("/{issue_id}/followers/{user_id}", response_model=FollowStatus)
def read_follow_status(issue_id: str, user_id: str, db: Session = Depends(get_db)) -> FollowStatus:
    try:
        following = is_following_issue(db, issue_id=issue_id, user_id=user_id)
    except IssueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found") from exc
    return FollowStatus(issue_id=issue_id, user_id=user_id, following=following)


@router.put("/{issue_id}/followers/{user_id}", response_model=FollowStatus)
def follow(issue_id: str, user_id: str, db: Session = Depends(get_db)) -> FollowStatus:
    """Subscribe a user to the updates of an issue. Repeating the call is harmless."""

    try:
        follow_issue(db, issue_id=issue_id, user_id=user_id)
    except IssueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found") from exc
    return FollowStatus(issue_id=issue_id, user_id=user_id, following=True)


@router.delete("/{issue_id}/followers/{user_id}", response_model=FollowStatus)
def unfollow(issue_id: str, user_id: str, db: Session = Depends(get_db)) -> FollowStatus:
    try:
        unfollow_issue(db, issue_id=issue_id, user_id=user_id)
    except IssueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found") from exc
    return FollowStatus(issue_id=issue_id, user_id=user_id, following=False)

def _notify_in_background(event: ChangeEvent) -> None:
    """Run the notification fan-out on its own database session.

    The issue change is already committed; a failure here is only logged.
    """

    session = SessionLocal()
    try:
        summary = notify_issue_change(session, event)
    except (IssueNotFoundError, EntityStoreUnavailableError) as exc:
        logger.warning("Could not deliver notifications for issue %s: %s", event.issue_id, exc)
        return
    finally:
        session.close()

    logger.info(
        "Background notification for issue %s finished: %s notification(s), %s email(s)",
        event.issue_id,
        summary.notifications_created,
        summary.emails_sent,
    )
