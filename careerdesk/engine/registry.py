"""
CareerDesk Table Registry — table id → declaration builder + record source.

Every list screen registers its table once at startup. Reflex event handlers
cannot keep callables in state, so they look the table up here on each event
and rebuild the declaration with fresh handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from careerdesk.engine.errors import CareerDeskObjectNotFoundError
from careerdesk.engine.record_source import RecordSource
from careerdesk.ui.components import DataTableDef

logger = logging.getLogger("careerdesk.engine.registry")


@dataclass
class TableHandlers:
    """Callbacks a screen supplies to its table. Missing ones hide their affordance."""
    delete: Optional[Callable[[Any], Any]] = None
    refresh: Optional[Callable[[], Any]] = None
    page_change: Optional[Callable[[int], Any]] = None
    add: Optional[Callable[[], Any]] = None


@dataclass
class TableRegistration:
    """A registered list screen table."""

    table_id: str                                  # e.g., "admin_jobs"
    builder: Callable[[TableHandlers], DataTableDef]
    source_factory: Callable[[], RecordSource]
    route: str = ""                                # e.g., "/admin/dashboard/jobs"
    metadata: Dict[str, Any] = field(default_factory=dict)


class TableRegistry:
    """
    In-memory registry of list screen tables.

    Usage:
        registry = TableRegistry()
        registry.register(TableRegistration("admin_jobs", jobs_table, jobs_source))
        definition = registry.build_definition("admin_jobs", handlers)
    """

    def __init__(self):
        self._tables: Dict[str, TableRegistration] = {}
        self._sources: Dict[str, RecordSource] = {}

    def register(self, registration: TableRegistration) -> None:
        if registration.table_id in self._tables:
            logger.warning(f"Table '{registration.table_id}' re-registered; replacing")
            self._sources.pop(registration.table_id, None)
        self._tables[registration.table_id] = registration
        logger.debug(f"Registered table: {registration.table_id}")

    def unregister(self, table_id: str) -> None:
        self._tables.pop(table_id, None)
        self._sources.pop(table_id, None)

    def resolve(self, table_id: str) -> Optional[TableRegistration]:
        return self._tables.get(table_id)

    def get(self, table_id: str) -> TableRegistration:
        """Resolve or raise CareerDeskObjectNotFoundError."""
        registration = self.resolve(table_id)
        if registration is None:
            raise CareerDeskObjectNotFoundError(
                f"Table not registered: {table_id}",
                table_id=table_id,
            )
        return registration

    def build_definition(self, table_id: str, handlers: TableHandlers) -> DataTableDef:
        return self.get(table_id).builder(handlers)

    def source_for(self, table_id: str) -> RecordSource:
        """The table's record source, created on first use and then reused."""
        registration = self.get(table_id)
        if table_id not in self._sources:
            self._sources[table_id] = registration.source_factory()
        return self._sources[table_id]

    def table_ids(self) -> List[str]:
        return sorted(self._tables)

    def contains(self, table_id: str) -> bool:
        return table_id in self._tables

    @property
    def count(self) -> int:
        return len(self._tables)

    def clear(self) -> None:
        self._tables.clear()
        self._sources.clear()


# Global registry singleton
table_registry = TableRegistry()
