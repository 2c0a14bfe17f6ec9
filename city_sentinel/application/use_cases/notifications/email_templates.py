"""HTML email templates for issue change notifications.

Templates are looked up by ``(event kind, recipient role)``. Owners are
addressed about "your issue"; followers get a banner explaining why they
receive the message and are addressed about "an issue you follow".
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from html import escape

from city_sentinel.domain.entities import (
    EVENT_KIND_STATUS,
    EVENT_KIND_VERIFICATION,
    RECIPIENT_ROLE_FOLLOWER,
    RECIPIENT_ROLE_OWNER,
    ChangeEvent,
    IssueSnapshot,
    RecipientTarget,
)

from .labels import badge_colors, label_for
from .writer import compose_notification_copy

BRAND_NAME = "City Sentinel"
DESCRIPTION_PREVIEW_LENGTH = 150


@dataclass(frozen=True)
class EmailTheme:
    """Colours and wording shared by every template of an event kind."""

    header_caption: str
    gradient: tuple[str, str]
    banner_background: str
    banner_accent: str
    closing: str


@dataclass(frozen=True)
class EmailTemplate:
    theme: EmailTheme
    headline: str
    follower_banner: bool
    subject: Callable[[ChangeEvent, IssueSnapshot, RecipientTarget], str]
    details: Callable[[ChangeEvent], str]


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


STATUS_THEME = EmailTheme(
    header_caption="Issue Status Update",
    gradient=("#2563eb", "#3b82f6"),
    banner_background="#eff6ff",
    banner_accent="#3b82f6",
    closing="Thank you for helping improve our city! We appreciate your patience and engagement.",
)

VERIFICATION_THEME = EmailTheme(
    header_caption="Issue Verification Update",
    gradient=("#7c3aed", "#8b5cf6"),
    banner_background="#f3e8ff",
    banner_accent="#7c3aed",
    closing="Thank you for helping improve our city! We appreciate your engagement.",
)


def _badge(kind: str, value: str | None) -> str:
    background, color = badge_colors(value)
    return (
        f'<span style="display: inline-block; padding: 8px 16px; border-radius: 20px; '
        f'font-weight: 600; margin: 10px 0; background: {background}; color: {color};">'
        f"{escape(label_for(kind, value))}</span>"
    )


def _status_details(event: ChangeEvent) -> str:
    return "".join(
        (
            "<p><strong>Status:</strong></p>",
            "<p>",
            _badge(event.kind, event.old_value),
            ' <span style="color: #6b7280;">&rarr;</span> ',
            _badge(event.kind, event.new_value),
            "</p>",
        )
    )


def _verification_details(event: ChangeEvent) -> str:
    parts = ["<p><strong>Verification Status:</strong></p>", "<p>"]
    if event.old_value is not None:
        parts.append(_badge(event.kind, event.old_value))
        parts.append(' <span style="color: #6b7280;">&rarr;</span> ')
    parts.append(_badge(event.kind, event.new_value))
    parts.append("</p>")
    if event.actor_name or event.actor_role:
        role = f" ({escape(event.actor_role)})" if event.actor_role else ""
        parts.append(
            '<div style="background: #ede9fe; padding: 10px 15px; border-radius: 6px; '
            'margin: 10px 0; font-size: 14px;">'
            f"<strong>Verified by:</strong> {escape(event.actor_name or 'Unknown')}{role}"
            "</div>"
        )
    return "".join(parts)


def _owner_subject(event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget) -> str:
    title, _ = compose_notification_copy(event, issue, target)
    return title


def _follower_subject(prefix: str) -> Callable[[ChangeEvent, IssueSnapshot, RecipientTarget], str]:
    def subject(event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget) -> str:
        return f"{prefix}: {issue.title}"

    return subject


TEMPLATES: dict[tuple[str, str], EmailTemplate] = {
    (EVENT_KIND_STATUS, RECIPIENT_ROLE_OWNER): EmailTemplate(
        theme=STATUS_THEME,
        headline="Your issue has been updated!",
        follower_banner=False,
        subject=_owner_subject,
        details=_status_details,
    ),
    (EVENT_KIND_STATUS, RECIPIENT_ROLE_FOLLOWER): EmailTemplate(
        theme=STATUS_THEME,
        headline="An issue you follow has been updated!",
        follower_banner=True,
        subject=_follower_subject("Issue Update"),
        details=_status_details,
    ),
    (EVENT_KIND_VERIFICATION, RECIPIENT_ROLE_OWNER): EmailTemplate(
        theme=VERIFICATION_THEME,
        headline="Your issue verification status has changed!",
        follower_banner=False,
        subject=_owner_subject,
        details=_verification_details,
    ),
    (EVENT_KIND_VERIFICATION, RECIPIENT_ROLE_FOLLOWER): EmailTemplate(
        theme=VERIFICATION_THEME,
        headline="An issue you follow has a verification update!",
        follower_banner=True,
        subject=_follower_subject("Verification Update"),
        details=_verification_details,
    ),
}


def select_template(kind: str, role: str) -> EmailTemplate:
    try:
        return TEMPLATES[(kind, role)]
    except KeyError:
        msg = f"No email template for {kind} changes sent to {role} recipients"
        raise ValueError(msg) from None


def _preview(description: str) -> str:
    if len(description) <= DESCRIPTION_PREVIEW_LENGTH:
        return description
    return description[:DESCRIPTION_PREVIEW_LENGTH] + "..."


def render_email(
    event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget
) -> RenderedEmail:
    """Render the subject and HTML body sent to ``target``."""

    template = select_template(event.kind, target.role)
    theme = template.theme
    start, end = theme.gradient

    banner = ""
    if template.follower_banner:
        banner = (
            f'<div style="background: {theme.banner_background}; border-left: 4px solid '
            f'{theme.banner_accent}; padding: 12px; margin: 15px 0; border-radius: 0 8px 8px 0;">'
            "<strong>&#128204; You're following this issue</strong>"
            '<p style="margin: 5px 0 0; font-size: 14px;">'
            "You're receiving this because you're following this issue.</p>"
            "</div>"
        )

    address = ""
    if issue.address:
        address = (
            f'<p style="font-size: 14px; color: #6b7280;">&#128205; {escape(issue.address)}</p>'
        )

    html = "".join(
        (
            "<!DOCTYPE html><html><head><meta charset=\"utf-8\"></head>",
            '<body style="font-family: -apple-system, BlinkMacSystemFont, \'Segoe UI\', Roboto, '
            'sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0;">',
            '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">',
            f'<div style="background: linear-gradient(135deg, {start}, {end}); color: white; '
            'padding: 30px; border-radius: 12px 12px 0 0; text-align: center;">',
            f'<h1 style="margin: 0; font-size: 24px;">{BRAND_NAME}</h1>',
            f'<p style="margin: 10px 0 0; opacity: 0.9;">{theme.header_caption}</p>',
            "</div>",
            '<div style="background: #f8fafc; padding: 30px; border-radius: 0 0 12px 12px;">',
            banner,
            f'<h2 style="margin-top: 0;">{template.headline}</h2>',
            '<div style="background: white; border-radius: 8px; padding: 20px; margin: 20px 0;">',
            f'<h3 style="margin-top: 0;">{escape(issue.title)}</h3>',
            f'<p style="color: #6b7280; margin-bottom: 15px;">{escape(_preview(issue.description))}</p>',
            address,
            template.details(event),
            "</div>",
            f"<p>{theme.closing}</p>",
            "</div>",
            '<div style="text-align: center; color: #6b7280; font-size: 14px; margin-top: 20px;">',
            f"<p>{BRAND_NAME} - Making our city better, together</p>",
            '<p style="font-size: 12px; color: #9ca3af;">'
            "You can manage your notification preferences in your profile settings.</p>",
            "</div>",
            "</div></body></html>",
        )
    )
    return RenderedEmail(subject=template.subject(event, issue, target), html=html)


__all__ = ["EmailTemplate", "RenderedEmail", "TEMPLATES", "render_email", "select_template"]
