"""
CareerDesk display helpers — status/type/theme badges, dates, text truncation.

Pure, stateless functions used by nearly every column declaration. Badge
lookups are explicit tables with a default arm: an unknown code still renders,
title-cased and unstyled.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Union

from careerdesk.engine.errors import CareerDeskValidationError
from careerdesk.records import (
    ApplicationStatus,
    JobStatus,
    JobType,
    ResourceType,
    SessionStatus,
)
from careerdesk.ui.themes import Theme, theme_badge_class, theme_color_scheme


@dataclass(frozen=True)
class Badge:
    """A rendered badge: label plus style hooks for the renderer."""
    label: str
    class_name: str = ""
    variant: str = "default"
    color_scheme: str = "gray"

    def to_dict(self) -> Dict[str, str]:
        return {
            "label": self.label,
            "class_name": self.class_name,
            "variant": self.variant,
            "color_scheme": self.color_scheme,
        }


@dataclass(frozen=True)
class _BadgeStyle:
    label: str
    class_name: str
    color_scheme: str


def _style(label: str, color: str) -> _BadgeStyle:
    class_name = f"bg-{color}-100 text-{color}-800 hover:bg-{color}-100"
    return _BadgeStyle(label, class_name, color)


_STATUS_STYLES: Dict[str, _BadgeStyle] = {
    # Job postings
    JobStatus.OPEN.value: _style("Open", "green"),
    JobStatus.CLOSED.value: _style("Closed", "gray"),
    JobStatus.ARCHIVED.value: _style("Archived", "yellow"),
    # Review queues (mentors, CV reviews, references)
    "PENDING": _style("Pending", "blue"),
    "APPROVED": _style("Approved", "green"),
    "REJECTED": _style("Rejected", "red"),
    # Application pipeline
    ApplicationStatus.APPLIED.value: _style("Applied", "blue"),
    ApplicationStatus.SHARED_WITH_COMPANY.value: _style("Shared With Company", "purple"),
    ApplicationStatus.SHORTLISTED.value: _style("Shortlisted", "indigo"),
    ApplicationStatus.INTERVIEW_SCHEDULED.value: _style("Interview Scheduled", "orange"),
    ApplicationStatus.INTERVIEW_COMPLETED.value: _style("Interview Completed", "cyan"),
    ApplicationStatus.SELECTED.value: _style("Selected", "green"),
    ApplicationStatus.WITHDRAWN.value: _style("Withdrawn", "gray"),
    # Mentorship sessions
    SessionStatus.SCHEDULED.value: _style("Scheduled", "blue"),
    "CONFIRMED": _style("Confirmed", "teal"),
    SessionStatus.COMPLETED.value: _style("Completed", "green"),
    SessionStatus.CANCELLED.value: _style("Cancelled", "red"),
}

_TYPE_STYLES: Dict[str, _BadgeStyle] = {
    JobType.FULL_TIME.value: _style("Full-Time", "blue"),
    JobType.PART_TIME.value: _style("Part-Time", "purple"),
    JobType.CONTRACT.value: _style("Contract", "orange"),
    JobType.INTERNSHIP.value: _style("Internship", "green"),
}

_RESOURCE_TYPE_LABELS: Dict[str, str] = {
    ResourceType.PDF.value: "PDF",
    ResourceType.VIDEO.value: "Video",
    ResourceType.IMAGE.value: "Image",
    ResourceType.DOCUMENT.value: "Document",
    ResourceType.LINK.value: "Link",
    ResourceType.OTHER.value: "Other",
}


def _code(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def title_case_code(code: str) -> str:
    """
    Turn a status code into a label.

        >>> title_case_code("SHARED_WITH_COMPANY")
        'Shared With Company'
        >>> title_case_code("FULL-TIME")
        'Full-Time'
    """
    words = code.replace("_", " ").split(" ")
    return " ".join(
        "-".join(part.capitalize() for part in word.split("-")) for word in words
    )


def status_badge(status: object, variant: str = "default") -> Badge:
    """Badge for a job, application, review or session status code."""
    code = _code(status)
    style = _STATUS_STYLES.get(code)
    if style is None:
        return Badge(label=title_case_code(code), variant=variant)
    return Badge(
        label=style.label,
        class_name=style.class_name,
        variant=variant,
        color_scheme=style.color_scheme,
    )


def type_badge(job_type: object) -> Badge:
    """Badge for a job type (FULL-TIME, PART-TIME, CONTRACT, INTERNSHIP)."""
    code = _code(job_type)
    style = _TYPE_STYLES.get(code)
    if style is None:
        return Badge(label=title_case_code(code))
    return Badge(
        label=style.label,
        class_name=style.class_name,
        color_scheme=style.color_scheme,
    )


def theme_badge(text: str, theme: Union[Theme, str] = Theme.DEFAULT) -> Badge:
    """Badge rendering arbitrary text in a theme's colors."""
    return Badge(
        label=text,
        class_name=theme_badge_class(theme),
        color_scheme=theme_color_scheme(theme),
    )


def resource_type_label(resource_type: object) -> str:
    code = _code(resource_type)
    return _RESOURCE_TYPE_LABELS.get(code, title_case_code(code))


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _parse_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise CareerDeskValidationError(
        f"Cannot format '{value}' as a date", field="date", value=value
    )


def format_date(value: Union[str, date, datetime]) -> str:
    """
    Format a calendar date as ``Mon D, YYYY``.

        >>> format_date("2024-03-05T10:30:00Z")
        'Mar 5, 2024'
    """
    d = _parse_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_optional_date(value: Optional[Union[str, date, datetime]], placeholder: str = "") -> str:
    """format_date, or *placeholder* when the value is missing."""
    if value is None or value == "":
        return placeholder
    return format_date(value)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def truncate_to_words(text: Optional[str], word_count: int = 3) -> str:
    """Keep the first *word_count* words, appending ``...`` when truncated."""
    if not text:
        return ""
    words = text.split()
    if len(words) <= word_count:
        return text
    return " ".join(words[:word_count]) + "..."


def truncate_to_length(text: Optional[str], max_length: int) -> str:
    """Keep the first *max_length* characters, appending ``...`` when truncated."""
    if not text:
        return text or ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
