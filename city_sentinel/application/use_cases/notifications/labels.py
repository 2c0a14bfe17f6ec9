"""Human readable labels and badge colours for issue states."""

from __future__ import annotations

from city_sentinel.domain.entities import EVENT_KIND_STATUS, EVENT_KIND_VERIFICATION

STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "in_progress": "In Progress",
    "resolved": "Resolved",
    "withdrawn": "Withdrawn",
}

VERIFICATION_LABELS: dict[str, str] = {
    "pending_verification": "Pending Verification",
    "verified": "Verified",
    "invalid": "Invalid",
    "spam": "Spam",
}

BADGE_COLORS: dict[str, str] = {
    "pending": "amber",
    "in_progress": "blue",
    "resolved": "green",
    "withdrawn": "gray",
    "pending_verification": "amber",
    "verified": "green",
    "invalid": "red",
    "spam": "gray",
}

# (background, text)
BADGE_PALETTE: dict[str, tuple[str, str]] = {
    "amber": ("#fef3c7", "#92400e"),
    "blue": ("#dbeafe", "#1e40af"),
    "green": ("#d1fae5", "#065f46"),
    "gray": ("#f3f4f6", "#374151"),
    "red": ("#fee2e2", "#991b1b"),
}

NO_VALUE_LABEL = "None"

_LABELS_BY_KIND = {
    EVENT_KIND_STATUS: STATUS_LABELS,
    EVENT_KIND_VERIFICATION: VERIFICATION_LABELS,
}


def label_for(kind: str, value: str | None) -> str:
    """Return the display label of ``value``, falling back to the raw value."""

    if value is None:
        return NO_VALUE_LABEL
    return _LABELS_BY_KIND.get(kind, {}).get(value, value)


def badge_colors(value: str | None) -> tuple[str, str]:
    """Return the ``(background, text)`` colours used to render ``value``."""

    return BADGE_PALETTE[BADGE_COLORS.get(value or "", "gray")]


__all__ = [
    "BADGE_COLORS",
    "BADGE_PALETTE",
    "NO_VALUE_LABEL",
    "STATUS_LABELS",
    "VERIFICATION_LABELS",
    "badge_colors",
    "label_for",
]
