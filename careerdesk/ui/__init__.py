"""
CareerDesk UI — table declarations, the tabular data view, display helpers.

Public API:
    Declarations: DataTable, Column, Action, Filter, PaginationConfig,
                  ButtonAction, DeleteConfirmation, NavigationIntent, key_field
    View:         TableController, TableViewState
    Helpers:      status_badge, type_badge, theme_badge, format_date, Theme

The Reflex renderer lives in ``careerdesk.ui.renderer`` and is imported by
the app, not here.
"""

from careerdesk.ui.components import (
    Action,
    ButtonAction,
    Column,
    DataTable,
    DeleteConfirmation,
    Filter,
    NavigationIntent,
    PaginationConfig,
    key_field,
)
from careerdesk.ui.formatting import format_date, status_badge, theme_badge, type_badge
from careerdesk.ui.table_view import TableController, TableViewState
from careerdesk.ui.themes import Theme

__all__ = [
    "Action",
    "ButtonAction",
    "Column",
    "DataTable",
    "DeleteConfirmation",
    "Filter",
    "NavigationIntent",
    "PaginationConfig",
    "key_field",
    "TableController",
    "TableViewState",
    "format_date",
    "status_badge",
    "theme_badge",
    "type_badge",
    "Theme",
]
