"""
CareerDesk Component Declarations — the configuration side of the data table.

A list screen declares its table once: columns, row actions, filters,
pagination and callbacks. The declaration holds no records and no UI state;
``TableController`` combines it with the current record list and the
per-instance UI state, and the renderer turns the result into Reflex
components.

Available declarations:
    DataColumn          → one table column (field or derived value)
    DataAction          → one entry in a row's action menu
    FilterSpec          → a dropdown filter over one field
    PaginationConfig    → client- or server-side paging
    ButtonAction        → add / empty-state call to action
    DeleteConfirmation  → texts of the delete dialog
    NavigationIntent    → returned by handlers that want to change pages
    DataTableDef        → the whole table (built with ``DataTable(...)``)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as datafield
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from careerdesk.engine.errors import CareerDeskValidationError
from careerdesk.ui.themes import Theme

logger = logging.getLogger("careerdesk.ui.components")

ALL_FILTER_VALUE = "all"

ALIGNMENTS = ("left", "center", "right")
ACTION_VARIANTS = ("default", "destructive", "outline", "secondary", "ghost", "link")
PAGINATION_MODES = ("client", "server")

RowKey = Callable[[Any], Any]


def _check_choice(field_name: str, value: str, allowed: Sequence[str]) -> None:
    if value not in allowed:
        raise CareerDeskValidationError(
            f"{field_name} must be one of {', '.join(allowed)}, got '{value}'",
            field=field_name,
            value=value,
            allowed=list(allowed),
        )


def option_text(value: Any) -> str:
    """String form of a filter option value as carried by a dropdown."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass
class ComponentDef:
    """Base class for all CareerDesk component declarations."""
    _component_type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self._component_type}


@dataclass
class DataColumn(ComponentDef):
    """
    A table column.

    ``key`` names a record field, or a synthetic key used only by ``render``.
    Default sorting compares ``record[key]``, so a synthetic key sorts as if
    every value were missing. ``sortable=None`` means "follow the table".
    """
    _component_type: str = "data_column"

    key: str = ""
    header: str = ""
    render: Optional[Callable[[Any], Any]] = None
    sortable: Optional[bool] = None
    width: Optional[str] = None
    align: str = "left"
    class_name: str = ""
    header_class_name: str = ""
    cell_class_name: str = ""

    def __post_init__(self) -> None:
        _check_choice("align", self.align, ALIGNMENTS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self._component_type,
            "key": self.key,
            "header": self.header,
            "sortable": self.sortable,
            "width": self.width,
            "align": self.align,
            "class_name": self.class_name,
            "header_class_name": self.header_class_name,
            "cell_class_name": self.cell_class_name,
        }


@dataclass
class DataAction(ComponentDef):
    """
    A row action shown in the row's overflow menu.

    ``on_click(record)`` may return a ``NavigationIntent``. ``disabled(record)``
    is evaluated at click time; a disabled action is never invoked.
    """
    _component_type: str = "data_action"

    label: str = ""
    on_click: Optional[Callable[[Any], Any]] = None
    icon: Optional[str] = None
    variant: str = "default"
    class_name: str = ""
    disabled: Optional[Callable[[Any], bool]] = None

    def __post_init__(self) -> None:
        _check_choice("variant", self.variant, ACTION_VARIANTS)

    def is_disabled(self, record: Any) -> bool:
        return bool(self.disabled(record)) if self.disabled else False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self._component_type,
            "label": self.label,
            "icon": self.icon,
            "variant": self.variant,
            "class_name": self.class_name,
        }


@dataclass
class FilterOption:
    value: Any = ""
    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"value": option_text(self.value), "label": self.label}


@dataclass
class FilterSpec(ComponentDef):
    """Dropdown filter over one field. Selecting ``"all"`` removes the constraint."""
    _component_type: str = "filter"

    key: str = ""
    label: str = ""
    options: List[FilterOption] = datafield(default_factory=list)

    def choices(self) -> List[FilterOption]:
        """Options as shown in the dropdown, ``All {label}`` first."""
        if any(o.value == ALL_FILTER_VALUE for o in self.options):
            return list(self.options)
        return [FilterOption(ALL_FILTER_VALUE, f"All {self.label}"), *self.options]

    def resolve(self, raw_value: str) -> Any:
        """Map a dropdown's string value back to the option value it stands for."""
        for option in self.choices():
            if option_text(option.value) == raw_value:
                return option.value
        return raw_value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self._component_type,
            "key": self.key,
            "label": self.label,
            "options": [o.to_dict() for o in self.choices()],
        }


@dataclass
class PaginationConfig(ComponentDef):
    """
    Paging configuration.

    mode="client": the table receives the complete list and slices it.
    mode="server": the table receives exactly one page; ``total_count`` is the
    remote total and ``on_page_change`` triggers the refetch upstream.
    """
    _component_type: str = "pagination"

    enabled: bool = True
    page_size: int = 10
    current_page: int = 1
    total_count: Optional[int] = None
    on_page_change: Optional[Callable[[int], Any]] = None
    mode: str = "client"

    def __post_init__(self) -> None:
        _check_choice("mode", self.mode, PAGINATION_MODES)
        if self.page_size < 1:
            raise CareerDeskValidationError(
                f"page_size must be >= 1, got {self.page_size}",
                field="page_size",
                value=self.page_size,
            )

    @property
    def is_server(self) -> bool:
        return self.mode == "server"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self._component_type,
            "enabled": self.enabled,
            "page_size": self.page_size,
            "current_page": self.current_page,
            "total_count": self.total_count,
            "mode": self.mode,
        }


@dataclass
class ButtonAction(ComponentDef):
    """Add / empty-state button."""
    _component_type: str = "button"

    label: str = ""
    on_click: Optional[Callable[[], Any]] = None
    icon: Optional[str] = None
    show: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self._component_type,
            "label": self.label,
            "icon": self.icon,
            "show": self.show,
        }


@dataclass
class DeleteConfirmation:
    title: str = "Are you absolutely sure?"
    description: str = "This action cannot be undone."

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.description}


@dataclass(frozen=True)
class NavigationIntent:
    """A request to change location, carried out by the injected navigator."""
    url: str
    new_tab: bool = False
    external: bool = False


@dataclass
class DataTableDef(ComponentDef):
    """
    Generic data table declaration.

    Holds columns, actions, filters, pagination and callbacks. Records,
    the loading flag and UI state are supplied separately at render time.
    """
    _component_type: str = "data_table"

    columns: List[DataColumn] = datafield(default_factory=list)
    row_key: Optional[RowKey] = None
    title: str = ""
    title_icon: Optional[str] = None
    subtitle: str = ""
    actions: List[DataAction] = datafield(default_factory=list)
    searchable: bool = False
    search_placeholder: str = "Search..."
    search_keys: List[str] = datafield(default_factory=list)
    filterable: bool = False
    filters: List[FilterSpec] = datafield(default_factory=list)
    sortable: bool = False
    pagination: Optional[PaginationConfig] = None
    empty_message: str = "No data found"
    empty_icon: Optional[str] = None
    empty_action: Optional[ButtonAction] = None
    add_action: Optional[ButtonAction] = None
    on_delete: Optional[Callable[[Any], Any]] = None
    delete_confirmation: DeleteConfirmation = datafield(default_factory=DeleteConfirmation)
    on_row_click: Optional[Callable[[Any], Any]] = None
    on_refresh: Optional[Callable[[], Any]] = None
    show_row_numbers: bool = False
    striped: bool = True
    hoverable: bool = True
    compact: bool = False
    bordered: bool = True
    show_card: bool = True
    theme: Theme = Theme.DEFAULT

    @property
    def has_row_menu(self) -> bool:
        return bool(self.actions) or self.on_delete is not None

    def column_is_sortable(self, column: DataColumn) -> bool:
        return self.sortable and column.sortable is not False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self._component_type,
            "columns": [c.to_dict() for c in self.columns],
            "title": self.title,
            "title_icon": self.title_icon,
            "subtitle": self.subtitle,
            "actions": [a.to_dict() for a in self.actions],
            "searchable": self.searchable,
            "search_placeholder": self.search_placeholder,
            "search_keys": list(self.search_keys),
            "filterable": self.filterable,
            "filters": [f.to_dict() for f in self.filters],
            "sortable": self.sortable,
            "pagination": self.pagination.to_dict() if self.pagination else None,
            "empty_message": self.empty_message,
            "empty_icon": self.empty_icon,
            "empty_action": self.empty_action.to_dict() if self.empty_action else None,
            "add_action": self.add_action.to_dict() if self.add_action else None,
            "deletable": self.on_delete is not None,
            "delete_confirmation": self.delete_confirmation.to_dict(),
            "row_clickable": self.on_row_click is not None,
            "refreshable": self.on_refresh is not None,
            "show_row_numbers": self.show_row_numbers,
            "striped": self.striped,
            "hoverable": self.hoverable,
            "compact": self.compact,
            "bordered": self.bordered,
            "show_card": self.show_card,
            "theme": self.theme.value,
        }


# ---------------------------------------------------------------------------
# Public API: constructor functions used by list screens
# ---------------------------------------------------------------------------

def key_field(name: str) -> RowKey:
    """Row key extractor reading one field of a dict or attribute record."""

    def extract(record: Any) -> Any:
        if isinstance(record, dict):
            return record.get(name)
        return getattr(record, name, None)

    extract.__name__ = f"key_field_{name}"
    return extract


def Column(
    key: str,
    header: str,
    render: Optional[Callable[[Any], Any]] = None,
    sortable: Optional[bool] = None,
    width: Optional[str] = None,
    align: str = "left",
    class_name: str = "",
    header_class_name: str = "",
    cell_class_name: str = "",
) -> DataColumn:
    """Create a DataColumn declaration."""
    return DataColumn(
        key=key,
        header=header,
        render=render,
        sortable=sortable,
        width=width,
        align=align,
        class_name=class_name,
        header_class_name=header_class_name,
        cell_class_name=cell_class_name,
    )


def Action(
    label: str,
    on_click: Callable[[Any], Any],
    icon: Optional[str] = None,
    variant: str = "default",
    disabled: Optional[Callable[[Any], bool]] = None,
    class_name: str = "",
) -> DataAction:
    """Create a DataAction declaration."""
    return DataAction(
        label=label,
        on_click=on_click,
        icon=icon,
        variant=variant,
        disabled=disabled,
        class_name=class_name,
    )


def Filter(key: str, label: str, options: Sequence[Union[FilterOption, tuple]]) -> FilterSpec:
    """Create a FilterSpec; options may be FilterOption or (value, label) tuples."""
    return FilterSpec(
        key=key,
        label=label,
        options=[o if isinstance(o, FilterOption) else FilterOption(*o) for o in options],
    )


def DataTable(
    columns: List[DataColumn],
    row_key: RowKey,
    title: str = "",
    title_icon: Optional[str] = None,
    subtitle: str = "",
    actions: Optional[List[DataAction]] = None,
    searchable: bool = False,
    search_placeholder: str = "Search...",
    search_keys: Optional[List[str]] = None,
    filterable: bool = False,
    filters: Optional[List[FilterSpec]] = None,
    sortable: bool = False,
    pagination: Optional[PaginationConfig] = None,
    empty_message: str = "No data found",
    empty_icon: Optional[str] = None,
    empty_action: Optional[ButtonAction] = None,
    add_action: Optional[ButtonAction] = None,
    on_delete: Optional[Callable[[Any], Any]] = None,
    delete_confirmation: Optional[DeleteConfirmation] = None,
    on_row_click: Optional[Callable[[Any], Any]] = None,
    on_refresh: Optional[Callable[[], Any]] = None,
    show_row_numbers: bool = False,
    striped: bool = True,
    hoverable: bool = True,
    compact: bool = False,
    bordered: bool = True,
    show_card: bool = True,
    theme: Union[Theme, str] = Theme.DEFAULT,
) -> DataTableDef:
    """
    Create a DataTable declaration.

    Raises:
        CareerDeskValidationError: unknown theme, or ``row_key`` is not callable.
    """
    if not callable(row_key):
        raise CareerDeskValidationError(
            "row_key must be a callable returning a stable key per record",
            field="row_key",
            value=row_key,
        )
    return DataTableDef(
        columns=list(columns),
        row_key=row_key,
        title=title,
        title_icon=title_icon,
        subtitle=subtitle,
        actions=actions or [],
        searchable=searchable,
        search_placeholder=search_placeholder,
        search_keys=search_keys or [],
        filterable=filterable,
        filters=filters or [],
        sortable=sortable,
        pagination=pagination,
        empty_message=empty_message,
        empty_icon=empty_icon,
        empty_action=empty_action,
        add_action=add_action,
        on_delete=on_delete,
        delete_confirmation=delete_confirmation or DeleteConfirmation(),
        on_row_click=on_row_click,
        on_refresh=on_refresh,
        show_row_numbers=show_row_numbers,
        striped=striped,
        hoverable=hoverable,
        compact=compact,
        bordered=bordered,
        show_card=show_card,
        theme=Theme.parse(theme),
    )
