"""Unit tests for careerdesk.ui.components — table declarations and validation."""

import pytest

from careerdesk.engine.errors import CareerDeskValidationError
from careerdesk.records import JobStatus
from careerdesk.ui.components import (
    Action,
    ButtonAction,
    Column,
    DataTable,
    Filter,
    FilterOption,
    PaginationConfig,
    key_field,
)
from careerdesk.ui.themes import Theme


class TestKeyField:
    def test_reads_dicts_and_objects(self):
        class Row:
            job_id = "j9"

        extract = key_field("job_id")
        assert extract({"job_id": "j1"}) == "j1"
        assert extract(Row()) == "j9"
        assert extract({}) is None


class TestColumn:
    def test_defaults(self):
        col = Column("title", "Title")
        assert col.align == "left"
        assert col.sortable is None
        assert col.to_dict()["type"] == "data_column"

    def test_invalid_align(self):
        with pytest.raises(CareerDeskValidationError) as exc_info:
            Column("title", "Title", align="middle")
        assert exc_info.value.field == "align"
        assert "center" in exc_info.value.allowed


class TestAction:
    def test_disabled_predicate(self):
        action = Action("Download", lambda r: None, disabled=lambda r: not r.get("url"))
        assert action.is_disabled({"url": ""})
        assert not action.is_disabled({"url": "https://cdn.example.com/cv.pdf"})

    def test_never_disabled_without_predicate(self):
        assert not Action("Edit", lambda r: None).is_disabled({})

    def test_invalid_variant(self):
        with pytest.raises(CareerDeskValidationError):
            Action("Edit", lambda r: None, variant="loud")


class TestFilter:
    def test_choices_prepend_all(self):
        spec = Filter("status", "Status", [("OPEN", "Open"), ("CLOSED", "Closed")])
        choices = spec.choices()
        assert choices[0] == FilterOption("all", "All Status")
        assert [c.value for c in choices[1:]] == ["OPEN", "CLOSED"]

    def test_resolve_maps_back_to_enum(self):
        spec = Filter("status", "Status", [(JobStatus.OPEN, "Open")])
        assert spec.resolve("OPEN") is JobStatus.OPEN
        assert spec.resolve("all") == "all"
        assert spec.resolve("UNKNOWN") == "UNKNOWN"

    def test_to_dict_uses_option_text(self):
        spec = Filter("status", "Status", [(JobStatus.CLOSED, "Closed")])
        assert spec.to_dict()["options"][1] == {"value": "CLOSED", "label": "Closed"}


class TestPaginationConfig:
    def test_defaults_to_client_mode(self):
        config = PaginationConfig()
        assert config.mode == "client"
        assert not config.is_server

    def test_page_size_must_be_positive(self):
        with pytest.raises(CareerDeskValidationError):
            PaginationConfig(page_size=0)


class TestDataTable:
    def test_requires_callable_row_key(self):
        with pytest.raises(CareerDeskValidationError) as exc_info:
            DataTable(columns=[Column("title", "Title")], row_key="job_id")
        assert exc_info.value.field == "row_key"

    def test_theme_by_name(self):
        table = DataTable(columns=[], row_key=key_field("id"), theme="success")
        assert table.theme is Theme.SUCCESS

    def test_unknown_theme_rejected(self):
        with pytest.raises(CareerDeskValidationError):
            DataTable(columns=[], row_key=key_field("id"), theme="neon")

    def test_row_menu_needs_actions_or_delete(self):
        plain = DataTable(columns=[], row_key=key_field("id"))
        assert not plain.has_row_menu
        assert DataTable(columns=[], row_key=key_field("id"), on_delete=lambda r: None).has_row_menu
        assert DataTable(
            columns=[], row_key=key_field("id"), actions=[Action("Edit", lambda r: None)]
        ).has_row_menu

    def test_column_sortable_follows_table(self):
        table = DataTable(
            columns=[Column("a", "A"), Column("b", "B", sortable=False)],
            row_key=key_field("id"),
            sortable=True,
        )
        assert table.column_is_sortable(table.columns[0])
        assert not table.column_is_sortable(table.columns[1])

    def test_to_dict(self):
        table = DataTable(
            columns=[Column("title", "Title")],
            row_key=key_field("id"),
            title="Jobs",
            add_action=ButtonAction(label="Add Job"),
            on_refresh=lambda: None,
        )
        data = table.to_dict()
        assert data["type"] == "data_table"
        assert data["title"] == "Jobs"
        assert data["add_action"]["label"] == "Add Job"
        assert data["refreshable"] is True
        assert data["deletable"] is False
        assert data["delete_confirmation"]["title"] == "Are you absolutely sure?"
        assert data["theme"] == "default"
