"""Unit tests for careerdesk.engine.registry — TableRegistry."""

import logging

import pytest

from careerdesk.engine.errors import CareerDeskObjectNotFoundError
from careerdesk.engine.record_source import InMemoryRecordSource
from careerdesk.engine.registry import (
    TableHandlers,
    TableRegistration,
    TableRegistry,
    table_registry,
)
from careerdesk.ui.components import Column, DataTable, key_field


def _builder(handlers: TableHandlers):
    return DataTable(
        columns=[Column("name", "Name")],
        row_key=key_field("id"),
        on_delete=handlers.delete,
        on_refresh=handlers.refresh,
    )


def _registration(table_id="people", factory=None):
    return TableRegistration(
        table_id=table_id,
        builder=_builder,
        source_factory=factory or (lambda: InMemoryRecordSource([{"id": 1, "name": "Ada"}], "id")),
        route="/people",
    )


class TestTableRegistry:
    def test_register_and_get(self):
        registry = TableRegistry()
        registry.register(_registration())
        assert registry.contains("people")
        assert registry.count == 1
        assert registry.get("people").route == "/people"

    def test_unknown_table(self):
        registry = TableRegistry()
        assert registry.resolve("ghost") is None
        with pytest.raises(CareerDeskObjectNotFoundError) as exc_info:
            registry.get("ghost")
        assert exc_info.value.table_id == "ghost"

    def test_build_definition_passes_handlers(self):
        registry = TableRegistry()
        registry.register(_registration())
        with_delete = registry.build_definition("people", TableHandlers(delete=lambda r: None))
        without = registry.build_definition("people", TableHandlers())
        assert with_delete.on_delete is not None
        assert without.on_delete is None
        assert without.on_refresh is None

    def test_source_created_once(self):
        created = []

        def factory():
            source = InMemoryRecordSource([], "id")
            created.append(source)
            return source

        registry = TableRegistry()
        registry.register(_registration(factory=factory))
        assert registry.source_for("people") is registry.source_for("people")
        assert len(created) == 1

    def test_reregister_replaces_and_drops_source(self, caplog):
        registry = TableRegistry()
        registry.register(_registration())
        first_source = registry.source_for("people")
        with caplog.at_level(logging.WARNING, logger="careerdesk.engine.registry"):
            registry.register(_registration())
        assert "re-registered" in caplog.text
        assert registry.count == 1
        assert registry.source_for("people") is not first_source

    def test_unregister_and_clear(self):
        registry = TableRegistry()
        registry.register(_registration("b"))
        registry.register(_registration("a"))
        assert registry.table_ids() == ["a", "b"]
        registry.unregister("a")
        assert registry.table_ids() == ["b"]
        registry.clear()
        assert registry.count == 0

    def test_global_singleton(self):
        assert isinstance(table_registry, TableRegistry)
