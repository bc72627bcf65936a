"""
CareerDesk Table View — the tabular data view behind every list screen.

Three layers:
    - Pure pipeline functions (search → filter → sort → paginate) over a
      list of records, with no side effects.
    - TableViewState: the per-instance UI state (search text, active filters,
      sort, pending delete target). Serializable for Reflex state.
    - TableController: applies user interactions to the state, invokes the
      caller's callbacks, and builds a TableViewModel for the renderer.

The controller never fetches or mutates records. Deletion, paging in server
mode and refresh are delegated to callbacks on the DataTableDef; action and
row-click handlers may return a NavigationIntent, which is handed to the
injected navigator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as datafield
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from careerdesk.engine.logging import LogEntry, log, log_table_delete, log_table_interaction
from careerdesk.ui.components import (
    ALL_FILTER_VALUE,
    DataAction,
    DataColumn,
    DataTableDef,
    NavigationIntent,
)
from careerdesk.ui.formatting import Badge
from careerdesk.ui.themes import theme_styles

logger = logging.getLogger("careerdesk.ui.table_view")

Navigator = Callable[[NavigationIntent], Any]
EventLogger = Callable[[LogEntry], Any]


# ---------------------------------------------------------------------------
# Sort / view state
# ---------------------------------------------------------------------------

class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    key: str
    direction: SortDirection = SortDirection.ASC


def next_sort(current: Optional[SortState], key: str) -> Optional[SortState]:
    """
    Header click transition for one column.

    unsorted / other column → asc → desc → unsorted
    """
    if current is None or current.key != key:
        return SortState(key, SortDirection.ASC)
    if current.direction == SortDirection.ASC:
        return SortState(key, SortDirection.DESC)
    return None


@dataclass
class TableViewState:
    """Per-instance UI state. Records and paging stay with the caller."""
    search_term: str = ""
    active_filters: Dict[str, Any] = datafield(default_factory=dict)
    sort: Optional[SortState] = None
    delete_target: Optional[Any] = None

    @property
    def is_pristine(self) -> bool:
        """True when nothing needs clearing (the Clear All button is hidden)."""
        return (
            self.search_term == ""
            and all(v == ALL_FILTER_VALUE for v in self.active_filters.values())
            and self.sort is None
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_term": self.search_term,
            "active_filters": dict(self.active_filters),
            "sort_key": self.sort.key if self.sort else "",
            "sort_direction": self.sort.direction.value if self.sort else "",
            "delete_target": self.delete_target,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableViewState":
        sort_key = data.get("sort_key") or ""
        sort = None
        if sort_key:
            sort = SortState(sort_key, SortDirection(data.get("sort_direction") or "asc"))
        return cls(
            search_term=data.get("search_term") or "",
            active_filters=dict(data.get("active_filters") or {}),
            sort=sort,
            delete_target=data.get("delete_target"),
        )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def get_field(record: Any, key: str) -> Any:
    """Read a field from a dict record or an attribute record; missing → None."""
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def apply_search(records: Iterable[Any], term: str, search_keys: Sequence[str]) -> List[Any]:
    """
    Keep records where any search key contains *term*, case-insensitive.

    The term is trimmed; an empty term keeps everything. None and empty
    field values never match.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return list(records)
    result = []
    for record in records:
        for key in search_keys:
            value = get_field(record, key)
            if value is None or value == "":
                continue
            if needle in _stringify(value).lower():
                result.append(record)
                break
    return result


def _strictly_equal(left: Any, right: Any) -> bool:
    # bool is an int subclass and str-enums are str subclasses; only the
    # former needs guarding
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, str) != isinstance(right, str):
        return False
    return left == right


def apply_filters(records: Iterable[Any], active_filters: Dict[str, Any]) -> List[Any]:
    """AND of ``record[key] == value`` for every filter not set to ``"all"``."""
    constraints = [
        (key, value)
        for key, value in active_filters.items()
        if not (isinstance(value, str) and value == ALL_FILTER_VALUE)
    ]
    if not constraints:
        return list(records)
    return [
        record
        for record in records
        if all(_strictly_equal(get_field(record, k), v) for k, v in constraints)
    ]


def _sort_key(value: Any) -> Tuple[int, int, Any]:
    """
    Total ordering key for one field value.

    Numbers sort before strings, and anything else sorts by its text after
    both. Missing values form their own group after every present value.
    """
    if value is None:
        return (1, 0, 0)
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (int, float)):
        return (0, 0, value)
    if isinstance(value, str):
        return (0, 1, value)
    return (0, 2, str(value))


def apply_sort(records: Iterable[Any], sort: Optional[SortState]) -> List[Any]:
    """
    Stable sort on one field; ties keep input order.

    Missing values go last when ascending and first when descending.
    """
    if sort is None:
        return list(records)
    key = sort.key
    return sorted(
        records,
        key=lambda record: _sort_key(get_field(record, key)),
        reverse=sort.direction == SortDirection.DESC,
    )


def paginate(records: Sequence[Any], current_page: int, page_size: int) -> List[Any]:
    """
    Slice ``[(current_page-1)*page_size, current_page*page_size)``.

    The page is not clamped: page 0 and below, or a page past the end,
    give an empty list.
    """
    end = current_page * page_size
    if end <= 0:
        return []
    start = max(0, end - page_size)
    return list(records[start:end])


def process_records(
    records: Iterable[Any],
    definition: DataTableDef,
    state: TableViewState,
) -> List[Any]:
    """Search, filter and sort; no pagination."""
    result = list(records)
    if definition.searchable and definition.search_keys:
        result = apply_search(result, state.search_term, definition.search_keys)
    if definition.filterable:
        result = apply_filters(result, state.active_filters)
    if definition.sortable:
        result = apply_sort(result, state.sort)
    return result


def page_count(total_count: int, page_size: int) -> int:
    if total_count <= 0:
        return 0
    return -(-total_count // page_size)


def page_window(current_page: int, total_pages: int, siblings: int = 1) -> List[Optional[int]]:
    """
    Page links to show: first, last and *siblings* pages either side of the
    current one. ``None`` marks an ellipsis; a gap of one page shows the page.

        >>> page_window(6, 12)
        [1, None, 5, 6, 7, None, 12]
    """
    if total_pages <= 0:
        return []
    low = max(1, current_page - siblings)
    high = min(total_pages, current_page + siblings)
    pages = sorted({1, total_pages, *range(low, high + 1)})
    items: List[Optional[int]] = []
    previous = 0
    for page in pages:
        if page - previous == 2:
            items.append(previous + 1)
        elif page - previous > 2:
            items.append(None)
        items.append(page)
        previous = page
    return items


# ---------------------------------------------------------------------------
# View model
# ---------------------------------------------------------------------------

class BodyState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ROWS = "rows"


@dataclass
class HeaderCell:
    key: str
    label: str
    sortable: bool = False
    sort_direction: Optional[str] = None
    align: str = "left"
    width: Optional[str] = None
    class_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "sortable": self.sortable,
            "sort_direction": self.sort_direction,
            "align": self.align,
            "width": self.width,
            "class_name": self.class_name,
        }


@dataclass
class CellView:
    key: str
    text: str = ""
    badge: Optional[Badge] = None
    align: str = "left"
    class_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "text": self.text,
            "badge": self.badge.to_dict() if self.badge else None,
            "align": self.align,
            "class_name": self.class_name,
        }


@dataclass
class ActionView:
    index: int
    label: str
    icon: Optional[str] = None
    variant: str = "default"
    disabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "label": self.label,
            "icon": self.icon,
            "variant": self.variant,
            "disabled": self.disabled,
        }


@dataclass
class RowView:
    key: Any
    number: int
    cells: List[CellView] = datafield(default_factory=list)
    actions: List[ActionView] = datafield(default_factory=list)
    deletable: bool = False
    clickable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "number": self.number,
            "cells": [c.to_dict() for c in self.cells],
            "actions": [a.to_dict() for a in self.actions],
            "deletable": self.deletable,
            "clickable": self.clickable,
        }


@dataclass
class EmptyView:
    message: str
    icon: Optional[str] = None
    action_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "icon": self.icon, "action_label": self.action_label}


@dataclass
class PageItem:
    page: Optional[int]
    current: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.page is None

    def to_dict(self) -> Dict[str, Any]:
        return {"page": self.page, "current": self.current, "ellipsis": self.is_ellipsis}


@dataclass
class PaginationView:
    current_page: int
    total_pages: int
    total_count: int
    page_size: int
    items: List[PageItem] = datafield(default_factory=list)

    @property
    def previous_disabled(self) -> bool:
        return self.current_page <= 1

    @property
    def next_disabled(self) -> bool:
        return self.current_page >= self.total_pages

    @property
    def range_start(self) -> int:
        return (self.current_page - 1) * self.page_size + 1

    @property
    def range_end(self) -> int:
        return min(self.current_page * self.page_size, self.total_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_count": self.total_count,
            "page_size": self.page_size,
            "items": [i.to_dict() for i in self.items],
            "previous_disabled": self.previous_disabled,
            "next_disabled": self.next_disabled,
            "range_start": self.range_start,
            "range_end": self.range_end,
        }


@dataclass
class DeleteDialogView:
    open: bool
    title: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"open": self.open, "title": self.title, "description": self.description}


@dataclass
class TableViewModel:
    """Everything the renderer needs for one frame of the table."""
    title: str
    subtitle: str
    body_state: BodyState
    headers: List[HeaderCell]
    rows: List[RowView]
    empty: EmptyView
    pagination: Optional[PaginationView]
    delete_dialog: DeleteDialogView
    show_clear_all: bool
    search_term: str
    active_filters: Dict[str, Any]
    styles: Dict[str, str]
    show_row_numbers: bool = False
    has_row_menu: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "body_state": self.body_state.value,
            "headers": [h.to_dict() for h in self.headers],
            "rows": [r.to_dict() for r in self.rows],
            "empty": self.empty.to_dict(),
            "pagination": self.pagination.to_dict() if self.pagination else None,
            "delete_dialog": self.delete_dialog.to_dict(),
            "show_clear_all": self.show_clear_all,
            "search_term": self.search_term,
            "active_filters": dict(self.active_filters),
            "styles": dict(self.styles),
            "show_row_numbers": self.show_row_numbers,
            "has_row_menu": self.has_row_menu,
        }


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------

class TableController:
    """
    Applies interactions to a TableViewState and derives the visible rows.

    Usage:
        controller = TableController(definition, records, navigator=router.push)
        controller.set_search("engineer")
        controller.click_header("created_at")
        view = controller.build_view()

    Args:
        definition: The table declaration.
        records: Full list (client mode) or one page (server mode).
        loading: Caller-owned loading flag.
        state: Existing UI state to continue from.
        navigator: Receives NavigationIntents returned by handlers.
        event_logger: Receives structured log entries; defaults to the
            global file logger.
        table_id: Identifier used in log entries.
    """

    def __init__(
        self,
        definition: DataTableDef,
        records: Sequence[Any],
        *,
        loading: bool = False,
        state: Optional[TableViewState] = None,
        navigator: Optional[Navigator] = None,
        event_logger: Optional[EventLogger] = None,
        table_id: str = "",
    ):
        self.definition = definition
        self.records = list(records)
        self.loading = loading
        self.state = state or TableViewState()
        self._navigator = navigator
        self._event_logger = event_logger or log
        self.table_id = table_id or definition.title or "table"
        pagination = definition.pagination
        self._current_page = pagination.current_page if pagination else 1

    # -- paging --------------------------------------------------------------

    @property
    def paginated(self) -> bool:
        pagination = self.definition.pagination
        return pagination is not None and pagination.enabled

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        pagination = self.definition.pagination
        return pagination.page_size if pagination else len(self.records)

    @property
    def total_count(self) -> int:
        """Remote total in server mode; size of the filtered list in client mode."""
        pagination = self.definition.pagination
        if pagination is not None and pagination.is_server:
            if pagination.total_count is not None:
                return pagination.total_count
            return len(self.records)
        return len(self.processed_records())

    @property
    def total_pages(self) -> int:
        if not self.paginated:
            return 1
        return page_count(self.total_count, self.page_size)

    def go_to_page(self, page: int) -> None:
        page = int(page)
        self._current_page = page
        pagination = self.definition.pagination
        if pagination is not None and pagination.on_page_change is not None:
            pagination.on_page_change(page)
        self._log("page", page=page)

    def previous_page(self) -> None:
        if self._current_page <= 1:
            return
        self.go_to_page(max(1, self._current_page - 1))

    def next_page(self) -> None:
        if self._current_page >= self.total_pages:
            return
        self.go_to_page(min(self.total_pages, self._current_page + 1))

    def _reset_page(self) -> None:
        if self.paginated and self._current_page != 1:
            self.go_to_page(1)

    # -- search / filter / sort ----------------------------------------------

    def set_search(self, term: str) -> None:
        self.state.search_term = term
        self._reset_page()
        self._log("search", search_term=term)

    def set_filter(self, key: str, value: Any) -> None:
        filters = dict(self.state.active_filters)
        filters[key] = value
        self.state.active_filters = filters
        self._reset_page()
        self._log("filter", filter_key=key, filter_value=value)

    def set_filter_choice(self, key: str, raw_value: str) -> None:
        """set_filter from a dropdown's string value, mapped back to the option's value."""
        for spec in self.definition.filters:
            if spec.key == key:
                self.set_filter(key, spec.resolve(raw_value))
                return
        self.set_filter(key, raw_value)

    def _column(self, key: str) -> Optional[DataColumn]:
        for column in self.definition.columns:
            if column.key == key:
                return column
        return None

    def click_header(self, key: str) -> Optional[SortState]:
        """Cycle the sort on a column. Non-sortable columns are ignored."""
        column = self._column(key)
        if column is None or not self.definition.column_is_sortable(column):
            return self.state.sort
        self.state.sort = next_sort(self.state.sort, key)
        self._reset_page()
        sort = self.state.sort
        self._log(
            "sort",
            sort_key=sort.key if sort else None,
            sort_direction=sort.direction.value if sort else None,
        )
        return sort

    def clear_all(self) -> None:
        self.state.search_term = ""
        self.state.active_filters = {}
        self.state.sort = None
        self._reset_page()
        self._log("clear_all")

    def show_clear_all(self) -> bool:
        return not self.state.is_pristine

    # -- derived records -----------------------------------------------------

    def processed_records(self) -> List[Any]:
        return process_records(self.records, self.definition, self.state)

    def visible_records(self) -> List[Any]:
        records = self.processed_records()
        pagination = self.definition.pagination
        if self.paginated and not pagination.is_server:
            return paginate(records, self._current_page, pagination.page_size)
        return records

    def show_pagination(self) -> bool:
        if not self.paginated or self.loading:
            return False
        if self.total_count <= self.page_size:
            return False
        return len(self.visible_records()) > 0

    def row_number(self, index: int) -> int:
        if self.paginated:
            return (self._current_page - 1) * self.page_size + index + 1
        return index + 1

    # -- rows, actions, delete -----------------------------------------------

    def _dispatch(self, result: Any) -> Any:
        if isinstance(result, NavigationIntent):
            if self._navigator is None:
                logger.warning(f"No navigator for {self.table_id}; dropping {result.url}")
            else:
                self._navigator(result)
        return result

    def click_row(self, record: Any) -> Any:
        if self.definition.on_row_click is None:
            return None
        return self._dispatch(self.definition.on_row_click(record))

    def click_action(self, action: Union[DataAction, int], record: Any) -> Any:
        """Invoke an action for a record unless it is disabled for that record."""
        if isinstance(action, int):
            action = self.definition.actions[action]
        if action.is_disabled(record):
            logger.debug(f"Action '{action.label}' disabled for row in {self.table_id}")
            return None
        return self._dispatch(action.on_click(record))

    def request_delete(self, record: Any) -> None:
        """Open the confirmation dialog; replaces any pending target."""
        if self.definition.on_delete is None:
            return
        self.state.delete_target = record

    def cancel_delete(self) -> None:
        self.state.delete_target = None

    def confirm_delete(self) -> Any:
        """
        Call ``on_delete`` with the pending target, then clear it.

        Returns the handler's result, which may be awaitable. No-op without
        a pending target.
        """
        target = self.state.delete_target
        if target is None or self.definition.on_delete is None:
            return None
        try:
            result = self.definition.on_delete(target)
        finally:
            self.state.delete_target = None
        self._emit(log_table_delete(self.table_id, self._row_key(target)))
        return result

    def refresh(self) -> Any:
        if self.definition.on_refresh is None:
            return None
        self._log("refresh")
        return self.definition.on_refresh()

    def add(self) -> Any:
        action = self.definition.add_action
        if action is None or action.on_click is None:
            return None
        return self._dispatch(action.on_click())

    def click_empty_action(self) -> Any:
        action = self.definition.empty_action
        if action is None or not action.show or action.on_click is None:
            return None
        return self._dispatch(action.on_click())

    # -- view model ----------------------------------------------------------

    def _row_key(self, record: Any) -> Any:
        return self.definition.row_key(record)

    def _cell(self, column: DataColumn, record: Any) -> CellView:
        value = column.render(record) if column.render else get_field(record, column.key)
        cell = CellView(key=column.key, align=column.align, class_name=column.cell_class_name)
        if isinstance(value, Badge):
            cell.badge = value
            cell.text = value.label
        elif value is not None:
            cell.text = _stringify(value)
        return cell

    def _headers(self) -> List[HeaderCell]:
        sort = self.state.sort
        headers = []
        for column in self.definition.columns:
            direction = sort.direction.value if sort and sort.key == column.key else None
            headers.append(
                HeaderCell(
                    key=column.key,
                    label=column.header,
                    sortable=self.definition.column_is_sortable(column),
                    sort_direction=direction,
                    align=column.align,
                    width=column.width,
                    class_name=column.header_class_name,
                )
            )
        return headers

    def _rows(self, records: List[Any]) -> List[RowView]:
        definition = self.definition
        rows = []
        seen = set()
        for index, record in enumerate(records):
            key = self._row_key(record)
            if key in seen:
                logger.warning(f"Duplicate row key {key!r} in {self.table_id}")
            seen.add(key)
            rows.append(
                RowView(
                    key=key,
                    number=self.row_number(index),
                    cells=[self._cell(c, record) for c in definition.columns],
                    actions=[
                        ActionView(
                            index=i,
                            label=a.label,
                            icon=a.icon,
                            variant=a.variant,
                            disabled=a.is_disabled(record),
                        )
                        for i, a in enumerate(definition.actions)
                    ],
                    deletable=definition.on_delete is not None,
                    clickable=definition.on_row_click is not None,
                )
            )
        return rows

    def _pagination_view(self, siblings: int) -> Optional[PaginationView]:
        if not self.show_pagination():
            return None
        total_pages = self.total_pages
        return PaginationView(
            current_page=self._current_page,
            total_pages=total_pages,
            total_count=self.total_count,
            page_size=self.page_size,
            items=[
                PageItem(page=p, current=p == self._current_page)
                for p in page_window(self._current_page, total_pages, siblings)
            ],
        )

    def body_state(self, visible: Optional[List[Any]] = None) -> BodyState:
        if self.loading:
            return BodyState.LOADING
        if visible is None:
            visible = self.visible_records()
        return BodyState.ROWS if visible else BodyState.EMPTY

    def build_view(self, pagination_window: int = 1) -> TableViewModel:
        definition = self.definition
        visible = self.visible_records()
        body_state = self.body_state(visible)
        empty_action = definition.empty_action
        return TableViewModel(
            title=definition.title,
            subtitle=definition.subtitle,
            body_state=body_state,
            headers=self._headers(),
            rows=self._rows(visible) if body_state == BodyState.ROWS else [],
            empty=EmptyView(
                message=definition.empty_message,
                icon=definition.empty_icon,
                action_label=empty_action.label if empty_action and empty_action.show else None,
            ),
            pagination=self._pagination_view(pagination_window),
            delete_dialog=DeleteDialogView(
                open=self.state.delete_target is not None,
                title=definition.delete_confirmation.title,
                description=definition.delete_confirmation.description,
            ),
            show_clear_all=self.show_clear_all(),
            search_term=self.state.search_term,
            active_filters=dict(self.state.active_filters),
            styles=theme_styles(definition.theme).to_dict(),
            show_row_numbers=definition.show_row_numbers,
            has_row_menu=definition.has_row_menu,
        )

    # -- logging -------------------------------------------------------------

    def _emit(self, entry: LogEntry) -> None:
        try:
            self._event_logger(entry)
        except OSError as exc:
            logger.warning(f"Could not write table event for {self.table_id}: {exc}")

    def _log(self, interaction: str, **details: Any) -> None:
        self._emit(log_table_interaction(self.table_id, interaction, **details))
