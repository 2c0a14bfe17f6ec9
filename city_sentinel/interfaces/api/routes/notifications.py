"""Endpoints invoked after an issue mutation to fan out notifications."""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from city_sentinel.application.use_cases.notifications import (
    IssueNotFoundError,
    notify_issue_change,
)
from city_sentinel.domain.entities import (
    EVENT_KIND_STATUS,
    EVENT_KIND_VERIFICATION,
    ChangeEvent,
)
from city_sentinel.infrastructure.database import EntityStoreUnavailableError, get_db
from city_sentinel.interfaces.api.schemas import (
    ErrorResponse,
    NotificationSummaryResponse,
    StatusChangeRequest,
    VerificationChangeRequest,
)

router = APIRouter(tags=["notifications"])
logger = logging.getLogger(__name__)

RequestModel = TypeVar("RequestModel", bound=BaseModel)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


class InvalidRequestBody(ValueError):
    """The request body is empty, not JSON, or does not match the schema."""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        problems.append(f"{location}: {error.get('msg')}")
    return "Invalid request body: " + "; ".join(problems)


async def _parse_body(request: Request, model: type[RequestModel]) -> RequestModel:
    raw = await request.body()
    logger.debug("Raw request body: %s", raw)
    if not raw.strip():
        raise InvalidRequestBody("Empty request body")
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequestBody("Invalid JSON in request body") from exc
    if not isinstance(payload, dict):
        raise InvalidRequestBody("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InvalidRequestBody(_describe_validation_error(exc)) from exc


async def _run(db: Session, event: ChangeEvent, message: str) -> JSONResponse | NotificationSummaryResponse:
    try:
        summary = await run_in_threadpool(notify_issue_change, db, event)
    except IssueNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, "Issue not found")
    except EntityStoreUnavailableError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    return NotificationSummaryResponse(
        success=True,
        message=message,
        notifications_created=summary.notifications_created,
        emails_sent=summary.emails_sent,
    )


@router.post(
    "/notify-status-change",
    response_model=NotificationSummaryResponse,
    responses=_ERROR_RESPONSES,
)
async def notify_status_change(request: Request, db: Session = Depends(get_db)):
    """Notify the reporter and followers that an issue changed status."""

    try:
        payload = await _parse_body(request, StatusChangeRequest)
    except InvalidRequestBody as exc:
        logger.warning("Rejected status change notification: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    event = ChangeEvent(
        issue_id=payload.issue_id,
        kind=EVENT_KIND_STATUS,
        old_value=payload.old_status,
        new_value=payload.new_status,
    )
    return await _run(db, event, "Notifications sent")


@router.post(
    "/notify-verification-change",
    response_model=NotificationSummaryResponse,
    responses=_ERROR_RESPONSES,
)
async def notify_verification_change(request: Request, db: Session = Depends(get_db)):
    """Notify the reporter and followers that an issue's verification changed."""

    try:
        payload = await _parse_body(request, VerificationChangeRequest)
    except InvalidRequestBody as exc:
        logger.warning("Rejected verification change notification: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    event = ChangeEvent(
        issue_id=payload.issue_id,
        kind=EVENT_KIND_VERIFICATION,
        old_value=payload.old_status,
        new_value=payload.new_status,
        actor_name=payload.verifier_name,
        actor_role=payload.verifier_role,
    )
    return await _run(db, event, "Verification notifications sent")
