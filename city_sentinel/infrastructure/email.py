"""Helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from city_sentinel.config import get_settings
from city_sentinel.domain.entities import EmailSendAttempt

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{field}: {message}")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_sendgrid_exception(exc: Exception) -> str:
    """Log a SendGrid API error and return a short description of it."""

    status_code = getattr(exc, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(exc, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
        return f"status {status_code}: {details}"
    if status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
        return f"status {status_code}"
    if details:
        logger.error("SendGrid API request failed: %s", details)
        return details

    logger.exception("Error sending email via SendGrid: %s", exc)
    return str(exc) or exc.__class__.__name__


def send_email(subject: str, html_content: str, recipient: str) -> EmailSendAttempt:
    """Send an email using the configured SendGrid credentials.

    Never raises: configuration gaps, transport errors and rejected requests
    are reported on the returned attempt.
    """

    attempt = EmailSendAttempt(recipient=recipient, subject=subject, html=html_content)

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        attempt.error = "email delivery is not configured"
        return attempt

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=[recipient],
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        # python_http_client hands this to urlopen.
        client.client.timeout = settings.email_send_timeout_seconds
        response = client.send(message)
    except Exception as exc:  # network and HTTP errors are raised by the client
        attempt.status_code = getattr(exc, "status_code", None)
        attempt.error = _describe_sendgrid_exception(exc)
        return attempt

    status_code = getattr(response, "status_code", None)
    attempt.status_code = status_code if isinstance(status_code, int) else None
    if attempt.status_code is None or not 200 <= attempt.status_code < 300:
        details = _extract_sendgrid_error_details(getattr(response, "body", None))
        if details:
            logger.error("SendGrid API responded with status %s: %s", status_code, details)
        else:
            logger.error("SendGrid API responded with status %s", status_code)
        attempt.error = details or f"unexpected status {status_code}"
        return attempt

    attempt.delivered = True
    return attempt


__all__ = ["send_email"]
