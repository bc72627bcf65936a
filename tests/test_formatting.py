"""Unit tests for careerdesk.ui.formatting and careerdesk.ui.themes."""

from datetime import date, datetime

import pytest

from careerdesk.engine.errors import CareerDeskValidationError
from careerdesk.records import ApplicationStatus, JobType
from careerdesk.ui.formatting import (
    format_date,
    format_optional_date,
    resource_type_label,
    status_badge,
    theme_badge,
    title_case_code,
    truncate_to_length,
    truncate_to_words,
    type_badge,
)
from careerdesk.ui.themes import Theme, theme_color_scheme, theme_styles


class TestStatusBadge:
    def test_known_status(self):
        badge = status_badge("SHARED_WITH_COMPANY")
        assert badge.label == "Shared With Company"
        assert "purple" in badge.class_name

    def test_enum_value(self):
        assert status_badge(ApplicationStatus.SELECTED).label == "Selected"

    def test_unknown_status_falls_back(self):
        badge = status_badge("ON_HOLD")
        assert badge.label == "On Hold"
        assert badge.class_name == ""
        assert badge.color_scheme == "gray"

    def test_variant_passthrough(self):
        assert status_badge("OPEN", variant="outline").variant == "outline"


class TestTypeBadge:
    def test_known_type(self):
        assert type_badge(JobType.FULL_TIME).label == "Full-Time"

    def test_hover_keeps_background(self):
        badge = type_badge("PART-TIME")
        assert badge.class_name == "bg-purple-100 text-purple-800 hover:bg-purple-100"
        assert badge.color_scheme == "purple"

    def test_unknown_type(self):
        badge = type_badge("FREELANCE")
        assert badge.label == "Freelance"
        assert badge.class_name == ""


class TestThemeBadge:
    def test_colors_follow_theme(self):
        badge = theme_badge("Featured", "danger")
        assert badge.label == "Featured"
        assert badge.color_scheme == "red"

    def test_unknown_theme(self):
        with pytest.raises(CareerDeskValidationError):
            theme_badge("x", "neon")


class TestLabels:
    def test_title_case_code(self):
        assert title_case_code("INTERVIEW_SCHEDULED") == "Interview Scheduled"
        assert title_case_code("PART-TIME") == "Part-Time"

    def test_resource_type_label(self):
        assert resource_type_label("PDF") == "PDF"
        assert resource_type_label("PODCAST") == "Podcast"


class TestDates:
    def test_iso_timestamp(self):
        assert format_date("2024-03-05T10:30:00Z") == "Mar 5, 2024"

    def test_date_and_datetime(self):
        assert format_date(date(2023, 12, 25)) == "Dec 25, 2023"
        assert format_date(datetime(2024, 7, 1, 23, 59)) == "Jul 1, 2024"

    def test_unparseable(self):
        with pytest.raises(CareerDeskValidationError):
            format_date("next tuesday")

    def test_optional(self):
        assert format_optional_date(None) == ""
        assert format_optional_date("", placeholder="N/A") == "N/A"
        assert format_optional_date("2024-01-02") == "Jan 2, 2024"


class TestTruncation:
    def test_words(self):
        assert truncate_to_words("Senior Python Backend Engineer", 3) == "Senior Python Backend..."
        assert truncate_to_words("Data Analyst", 3) == "Data Analyst"
        assert truncate_to_words(None) == ""

    def test_length(self):
        assert truncate_to_length("abcdefgh", 5) == "abcde..."
        assert truncate_to_length("abc", 5) == "abc"
        assert truncate_to_length(None, 5) == ""


class TestThemes:
    def test_every_theme_has_styles(self):
        for theme in Theme:
            styles = theme_styles(theme)
            assert styles.header_bg
            assert styles.primary.startswith("#")

    def test_parse_by_name(self):
        assert Theme.parse("warning") is Theme.WARNING
        assert theme_color_scheme("success") == "grass"

    def test_unknown_theme_lists_allowed(self):
        with pytest.raises(CareerDeskValidationError) as exc_info:
            Theme.parse("neon")
        assert "primary" in exc_info.value.allowed
