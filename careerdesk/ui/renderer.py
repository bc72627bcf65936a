"""
CareerDesk Table Renderer — Reflex state and component tree for data tables.

DataTableMixin keeps the serializable part of a table (records, paging,
search text, filters, sort, pending delete) in Reflex state. Callables can't
live there, so every event rebuilds the DataTableDef from the table registry,
runs the interaction through a TableController and writes the resulting UI
state back.

render_data_table() builds the static component tree from the declaration;
everything that changes per event is bound to the state's computed vars.

Rows reach the frontend as flat ``dict[str, str]`` records (cell_0,
cell_0_badge, action_0_disabled, ...) so rx.foreach never has to iterate
untyped nested values.

RecordDetailMixin and render_record_detail() show one record of a registered
table, using the table's columns as the field list.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import Any, Dict, List, Optional, Type

import reflex as rx

from careerdesk.engine.config import get_config
from careerdesk.engine.errors import CareerDeskError
from careerdesk.engine.registry import TableHandlers, table_registry
from careerdesk.ui.components import DataTableDef, NavigationIntent, option_text
from careerdesk.ui.table_view import (
    RowView,
    SortDirection,
    SortState,
    TableController,
    TableViewState,
)
from careerdesk.ui.themes import theme_color_scheme, theme_styles

logger = logging.getLogger("careerdesk.ui.renderer")


def _flag(value: bool) -> str:
    return "1" if value else ""


def flatten_row(row: RowView) -> Dict[str, str]:
    """RowView → flat string dict consumed by the row template."""
    flat = {
        "key": str(row.key),
        "number": str(row.number),
        "clickable": _flag(row.clickable),
        "deletable": _flag(row.deletable),
    }
    for i, cell in enumerate(row.cells):
        flat[f"cell_{i}"] = cell.text
        flat[f"cell_{i}_badge"] = _flag(cell.badge is not None)
        flat[f"cell_{i}_class"] = cell.badge.class_name if cell.badge else cell.class_name
        flat[f"cell_{i}_scheme"] = cell.badge.color_scheme if cell.badge else ""
    for action in row.actions:
        flat[f"action_{action.index}_disabled"] = _flag(action.disabled)
    return flat


def _noop(*args: Any) -> None:
    return None


def display_handlers() -> TableHandlers:
    """
    Placeholder handlers for building a declaration to render or inspect.

    Paging, refresh and delete are carried out by DataTableMixin itself; the
    placeholders only make the declaration show those affordances.
    """
    return TableHandlers(delete=_noop, refresh=_noop, page_change=_noop)


def to_redirects(intents: List[NavigationIntent]) -> List[Any]:
    return [rx.redirect(i.url, is_external=i.new_tab or i.external) for i in intents]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

class DataTableMixin(rx.State, mixin=True):
    """
    Table state shared by every list screen.

    Subclasses set ``table_id`` to a registered table:

        class AdminJobsState(DataTableMixin, rx.State):
            table_id: str = "admin_jobs"
    """

    table_id: str = ""
    records: list[dict[str, Any]] = []
    loading: bool = False
    current_page: int = 1
    total_count: int = 0
    search_term: str = ""
    active_filters: dict[str, str] = {}
    sort_key: str = ""
    sort_direction: str = ""
    delete_target_key: str = ""
    delete_target: dict[str, Any] = {}
    error_message: str = ""

    # -- controller plumbing -------------------------------------------------

    def _handlers(self) -> TableHandlers:
        """Handlers that reach the record source, for events that mutate data."""
        source = table_registry.source_for(self.table_id)
        row_key = self._definition().row_key
        return TableHandlers(
            delete=lambda record: source.delete(row_key(record)),
            refresh=_noop,
            page_change=_noop,
        )

    def _definition(self, handlers: Optional[TableHandlers] = None) -> DataTableDef:
        definition = table_registry.build_definition(self.table_id, handlers or display_handlers())
        if definition.pagination is not None:
            definition.pagination = dataclasses.replace(
                definition.pagination,
                current_page=self.current_page,
                total_count=self.total_count,
            )
        return definition

    def _view_state(self, definition: DataTableDef) -> TableViewState:
        filters = {}
        for spec in definition.filters:
            if spec.key in self.active_filters:
                filters[spec.key] = spec.resolve(self.active_filters[spec.key])
        sort = None
        if self.sort_key:
            sort = SortState(self.sort_key, SortDirection(self.sort_direction or "asc"))
        # The record captured when the dialog opened, not a fresh lookup
        target = dict(self.delete_target) if self.delete_target_key else None
        return TableViewState(
            search_term=self.search_term,
            active_filters=filters,
            sort=sort,
            delete_target=target,
        )

    def _find_record(self, definition: DataTableDef, key: str) -> Optional[Dict[str, Any]]:
        for record in self.records:
            if str(definition.row_key(record)) == key:
                return record
        return None

    def _controller(
        self,
        handlers: Optional[TableHandlers] = None,
        intents: Optional[List[NavigationIntent]] = None,
    ) -> TableController:
        definition = self._definition(handlers)
        return TableController(
            definition,
            self.records,
            loading=self.loading,
            state=self._view_state(definition),
            navigator=intents.append if intents is not None else None,
            table_id=self.table_id,
        )

    def _store(self, controller: TableController) -> None:
        state = controller.state
        filters = {spec.key: "all" for spec in controller.definition.filters}
        filters.update({k: option_text(v) for k, v in state.active_filters.items()})
        self.active_filters = filters
        self.search_term = state.search_term
        self.sort_key = state.sort.key if state.sort else ""
        self.sort_direction = state.sort.direction.value if state.sort else ""
        if state.delete_target is None:
            self.delete_target_key = ""
            self.delete_target = {}
        else:
            self.delete_target_key = str(controller.definition.row_key(state.delete_target))
            self.delete_target = dict(state.delete_target)
        self.current_page = controller.current_page

    def _server_paged(self) -> bool:
        pagination = self._definition().pagination
        return pagination is not None and pagination.enabled and pagination.is_server

    async def _fetch(self) -> Optional[Any]:
        """Fetch the current view from the record source; returns an error toast on failure."""
        source = table_registry.source_for(self.table_id)
        definition = self._definition()
        try:
            if self._server_paged():
                page = await source.fetch_page(self.current_page, definition.pagination.page_size)
            else:
                page = await source.fetch_all()
        except CareerDeskError as e:
            logger.error(f"Loading {self.table_id} failed: {e.message}")
            self.error_message = e.message
            return rx.toast.error(e.message)
        finally:
            self.loading = False
        self.records = page.records
        self.total_count = page.total_count
        return None

    async def _reload(self):
        """Show the loading placeholder, then fetch."""
        self.loading = True
        self.error_message = ""
        yield
        toast = await self._fetch()
        if toast is not None:
            yield toast

    async def _after_reset(self, page_before: int):
        # Server mode holds one page; a page reset refetches
        if self._server_paged() and self.current_page != page_before:
            async for update in self._reload():
                yield update

    # -- event handlers ------------------------------------------------------

    async def load(self):
        """on_load: fetch the first view of the table."""
        controller = self._controller()
        self._store(controller)
        async for update in self._reload():
            yield update

    async def set_search(self, value: str):
        controller = self._controller()
        page_before = self.current_page
        controller.set_search(value)
        self._store(controller)
        async for update in self._after_reset(page_before):
            yield update

    async def set_filter(self, key: str, value: str):
        controller = self._controller()
        page_before = self.current_page
        controller.set_filter_choice(key, value)
        self._store(controller)
        async for update in self._after_reset(page_before):
            yield update

    async def sort_by(self, key: str):
        controller = self._controller()
        page_before = self.current_page
        controller.click_header(key)
        self._store(controller)
        async for update in self._after_reset(page_before):
            yield update

    async def clear_all(self):
        controller = self._controller()
        page_before = self.current_page
        controller.clear_all()
        self._store(controller)
        async for update in self._after_reset(page_before):
            yield update

    async def change_page(self, page: str):
        controller = self._controller()
        controller.go_to_page(int(page))
        self._store(controller)
        if self._server_paged():
            async for update in self._reload():
                yield update

    async def previous_page(self):
        controller = self._controller()
        controller.previous_page()
        self._store(controller)
        if self._server_paged():
            async for update in self._reload():
                yield update

    async def next_page(self):
        controller = self._controller()
        controller.next_page()
        self._store(controller)
        if self._server_paged():
            async for update in self._reload():
                yield update

    def run_action(self, index: str, row_key: str):
        intents: List[NavigationIntent] = []
        controller = self._controller(intents=intents)
        record = self._find_record(controller.definition, row_key)
        if record is None:
            return None
        controller.click_action(int(index), record)
        return to_redirects(intents)

    def open_row(self, row_key: str):
        intents: List[NavigationIntent] = []
        controller = self._controller(intents=intents)
        record = self._find_record(controller.definition, row_key)
        if record is None:
            return None
        controller.click_row(record)
        return to_redirects(intents)

    def run_empty_action(self):
        intents: List[NavigationIntent] = []
        self._controller(intents=intents).click_empty_action()
        return to_redirects(intents)

    def run_add(self):
        intents: List[NavigationIntent] = []
        self._controller(intents=intents).add()
        return to_redirects(intents)

    def open_delete(self, row_key: str):
        controller = self._controller()
        record = self._find_record(controller.definition, row_key)
        if record is None:
            return
        controller.request_delete(record)
        self._store(controller)

    def cancel_delete(self):
        controller = self._controller()
        controller.cancel_delete()
        self._store(controller)

    async def confirm_delete(self):
        controller = self._controller(handlers=self._handlers())
        if controller.state.delete_target is None:
            return
        result = controller.confirm_delete()
        self._store(controller)
        try:
            if inspect.isawaitable(result):
                await result
        except CareerDeskError as e:
            logger.error(f"Delete in {self.table_id} failed: {e.message}")
            yield rx.toast.error(e.message)
            return
        async for update in self._reload():
            yield update
        yield rx.toast.success("Deleted successfully")

    async def refresh(self):
        controller = self._controller(handlers=self._handlers())
        controller.refresh()
        async for update in self._reload():
            yield update

    # -- computed vars -------------------------------------------------------

    @rx.var(cache=False)
    def body_state(self) -> str:
        return self._controller().body_state().value

    @rx.var(cache=False)
    def rows(self) -> list[dict[str, str]]:
        controller = self._controller()
        view = controller.build_view(get_config().ui.pagination_window)
        return [flatten_row(r) for r in view.rows]

    @rx.var(cache=False)
    def show_pagination(self) -> bool:
        return self._controller().show_pagination()

    @rx.var(cache=False)
    def show_clear_all(self) -> bool:
        return self._controller().show_clear_all()

    @rx.var(cache=False)
    def total_pages(self) -> int:
        return self._controller().total_pages

    @rx.var(cache=False)
    def page_items(self) -> list[dict[str, str]]:
        view = self._controller().build_view(get_config().ui.pagination_window)
        if view.pagination is None:
            return []
        return [
            {
                "page": "" if item.page is None else str(item.page),
                "ellipsis": _flag(item.is_ellipsis),
                "current": _flag(item.current),
            }
            for item in view.pagination.items
        ]

    @rx.var(cache=False)
    def range_label(self) -> str:
        view = self._controller().build_view(get_config().ui.pagination_window)
        if view.pagination is None:
            return ""
        p = view.pagination
        return f"Showing {p.range_start} to {p.range_end} of {p.total_count} results"


def detail_fields(definition: DataTableDef, record: Dict[str, Any]) -> List[Dict[str, str]]:
    """One label/value pair per column of *definition*, rendered for a single record."""
    view = TableController(definition, [record], event_logger=_noop).build_view()
    if not view.rows:
        return []
    fields = []
    for header, cell in zip(view.headers, view.rows[0].cells):
        fields.append({
            "label": header.label,
            "value": cell.text,
            "badge": _flag(cell.badge is not None),
            "scheme": cell.badge.color_scheme if cell.badge else "",
        })
    return fields


class RecordDetailMixin(rx.State, mixin=True):
    """
    Read-only view of one record from a registered table.

    The page route carries the row key as ``[record_id]``; the fields are the
    table's own columns, rendered the same way as in the list.
    """

    table_id: str = ""
    back_route: str = ""
    record: dict[str, Any] = {}
    loading: bool = False
    error_message: str = ""

    async def _fetch_record(self, key: str):
        self.loading = True
        self.error_message = ""
        self.record = {}
        yield
        try:
            self.record = await table_registry.source_for(self.table_id).fetch_one(key)
        except CareerDeskError as e:
            logger.error(f"Loading {self.table_id} record {key} failed: {e.message}")
            self.error_message = e.message
        finally:
            self.loading = False

    async def load(self):
        """on_load: fetch the record named by the route."""
        key = self.router.page.params.get("record_id", "")
        async for update in self._fetch_record(str(key)):
            yield update

    def back(self):
        return rx.redirect(self.back_route)

    @rx.var(cache=False)
    def fields(self) -> list[dict[str, str]]:
        if not self.record:
            return []
        definition = table_registry.build_definition(self.table_id, TableHandlers())
        return detail_fields(definition, dict(self.record))


# ---------------------------------------------------------------------------
# Component tree
# ---------------------------------------------------------------------------

def _filter_handler(state: Type[DataTableMixin], key: str):
    return lambda value: state.set_filter(key, value)


def _search_and_filters(state: Type[DataTableMixin], definition: DataTableDef) -> rx.Component:
    items = []
    if definition.searchable:
        items.append(
            rx.input(
                rx.input.slot(rx.icon("search", size=16)),
                placeholder=definition.search_placeholder,
                value=state.search_term,
                on_change=state.set_search,
                width="100%",
                max_width="360px",
            )
        )
    if definition.filterable:
        for spec in definition.filters:
            items.append(
                rx.select.root(
                    rx.select.trigger(placeholder=spec.label),
                    rx.select.content(
                        *[
                            rx.select.item(option.label, value=option_text(option.value))
                            for option in spec.choices()
                        ]
                    ),
                    value=state.active_filters[spec.key],
                    on_change=_filter_handler(state, spec.key),
                )
            )
    items.append(
        rx.cond(
            state.show_clear_all,
            rx.button(rx.icon("x", size=14), "Clear All", variant="outline", on_click=state.clear_all),
            rx.fragment(),
        )
    )
    return rx.card(
        rx.flex(*items, spacing="3", wrap="wrap", align="center", width="100%"),
        width="100%",
    )


def _card_header(state: Type[DataTableMixin], definition: DataTableDef) -> rx.Component:
    styles = theme_styles(definition.theme)
    scheme = theme_color_scheme(definition.theme)
    title = rx.hstack(
        rx.icon(definition.title_icon, color=styles.primary) if definition.title_icon else rx.fragment(),
        rx.vstack(
            rx.heading(definition.title, size="5"),
            rx.text(definition.subtitle, size="2", color="gray") if definition.subtitle else rx.fragment(),
            spacing="1",
        ),
        align="center",
        spacing="3",
    )
    buttons = []
    if definition.on_refresh is not None:
        buttons.append(
            rx.button(
                rx.icon("refresh-cw", size=14),
                "Refresh",
                variant="outline",
                loading=state.loading,
                on_click=state.refresh,
            )
        )
    if definition.add_action is not None and definition.add_action.show:
        buttons.append(rx.button(rx.icon(definition.add_action.icon or "plus", size=14),
                                 definition.add_action.label, color_scheme=scheme,
                                 on_click=state.run_add))
    return rx.hstack(title, rx.spacer(), *buttons, width="100%", align="center")


def _header_row(state: Type[DataTableMixin], definition: DataTableDef) -> rx.Component:
    cells = []
    if definition.show_row_numbers:
        cells.append(rx.table.column_header_cell("#", width="48px"))
    for column in definition.columns:
        if definition.column_is_sortable(column):
            indicator = rx.cond(
                state.sort_key == column.key,
                rx.cond(
                    state.sort_direction == "asc",
                    rx.icon("arrow-up", size=14),
                    rx.icon("arrow-down", size=14),
                ),
                rx.icon("arrow-up-down", size=14, opacity="0.4"),
            )
            content = rx.hstack(rx.text(column.header), indicator, spacing="1", align="center")
            cells.append(
                rx.table.column_header_cell(
                    content,
                    on_click=state.sort_by(column.key),
                    cursor="pointer",
                    width=column.width,
                    text_align=column.align,
                )
            )
        else:
            cells.append(
                rx.table.column_header_cell(column.header, width=column.width, text_align=column.align)
            )
    if definition.has_row_menu:
        cells.append(rx.table.column_header_cell("", width="56px"))
    return rx.table.row(*cells)


def _row_menu(state: Type[DataTableMixin], definition: DataTableDef, row: Any) -> rx.Component:
    entries = [
        rx.menu.item(
            rx.hstack(rx.icon(action.icon, size=14) if action.icon else rx.fragment(),
                      rx.text(action.label), spacing="2"),
            on_click=state.run_action(str(i), row["key"]).stop_propagation,
            disabled=row[f"action_{i}_disabled"] != "",
        )
        for i, action in enumerate(definition.actions)
    ]
    if definition.on_delete is not None:
        if entries:
            entries.append(rx.menu.separator())
        entries.append(
            rx.menu.item(
                rx.hstack(rx.icon("trash-2", size=14), rx.text("Delete"), spacing="2"),
                color="red",
                on_click=state.open_delete(row["key"]).stop_propagation,
            )
        )
    return rx.menu.root(
        rx.menu.trigger(
            rx.icon_button(rx.icon("ellipsis-vertical", size=16), variant="ghost",
                           on_click=rx.stop_propagation),
        ),
        rx.menu.content(*entries),
    )


def _data_row(state: Type[DataTableMixin], definition: DataTableDef, row: Any) -> rx.Component:
    cells = []
    if definition.show_row_numbers:
        cells.append(rx.table.cell(rx.text(row["number"], color="gray")))
    for i, column in enumerate(definition.columns):
        content = rx.cond(
            row[f"cell_{i}_badge"] != "",
            rx.badge(row[f"cell_{i}"], color_scheme=row[f"cell_{i}_scheme"], class_name=row[f"cell_{i}_class"]),
            rx.text(row[f"cell_{i}"], class_name=row[f"cell_{i}_class"]),
        )
        cells.append(rx.table.cell(content, text_align=column.align))
    if definition.has_row_menu:
        cells.append(rx.table.cell(_row_menu(state, definition, row)))
    row_props: Dict[str, Any] = {}
    if definition.on_row_click is not None:
        row_props["on_click"] = state.open_row(row["key"])
        row_props["cursor"] = "pointer"
    if definition.hoverable:
        row_props["_hover"] = {"background": "var(--gray-3)"}
    return rx.table.row(*cells, **row_props)


def _column_count(definition: DataTableDef) -> int:
    return (
        len(definition.columns)
        + (1 if definition.show_row_numbers else 0)
        + (1 if definition.has_row_menu else 0)
    )


def _empty_row(state: Type[DataTableMixin], definition: DataTableDef) -> rx.Component:
    scheme = theme_color_scheme(definition.theme)
    action = definition.empty_action
    return rx.table.row(
        rx.table.cell(
            rx.vstack(
                rx.icon(definition.empty_icon or "inbox", size=32, color="gray"),
                rx.text(definition.empty_message, color="gray"),
                rx.button(action.label, color_scheme=scheme, on_click=state.run_empty_action)
                if action is not None and action.show else rx.fragment(),
                align="center",
                spacing="3",
                padding_y="8",
            ),
            col_span=_column_count(definition),
        )
    )


def _loading_row(definition: DataTableDef) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.center(rx.spinner(size="3"), padding_y="8"),
            col_span=_column_count(definition),
        )
    )


def _pagination(state: Type[DataTableMixin]) -> rx.Component:
    def page_button(item: Any) -> rx.Component:
        return rx.cond(
            item["ellipsis"] != "",
            rx.text("…", color="gray"),
            rx.button(
                item["page"],
                size="1",
                variant=rx.cond(item["current"] != "", "solid", "outline"),
                on_click=state.change_page(item["page"]),
            ),
        )

    return rx.cond(
        state.show_pagination,
        rx.hstack(
            rx.text(state.range_label, size="2", color="gray"),
            rx.spacer(),
            rx.button(
                rx.icon("chevron-left", size=14),
                "Previous",
                size="1",
                variant="outline",
                disabled=state.current_page <= 1,
                on_click=state.previous_page,
            ),
            rx.foreach(state.page_items, page_button),
            rx.button(
                "Next",
                rx.icon("chevron-right", size=14),
                size="1",
                variant="outline",
                disabled=state.current_page >= state.total_pages,
                on_click=state.next_page,
            ),
            spacing="2",
            width="100%",
            align="center",
        ),
        rx.fragment(),
    )


def _delete_dialog(state: Type[DataTableMixin], definition: DataTableDef) -> rx.Component:
    if definition.on_delete is None:
        return rx.fragment()
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title(definition.delete_confirmation.title),
            rx.alert_dialog.description(definition.delete_confirmation.description),
            rx.hstack(
                rx.button("Cancel", variant="outline", on_click=state.cancel_delete),
                rx.button("Delete", color_scheme="red", on_click=state.confirm_delete),
                spacing="3",
                justify="end",
                margin_top="4",
            ),
        ),
        open=state.delete_target_key != "",
    )


def render_data_table(state: Type[DataTableMixin], definition: DataTableDef) -> rx.Component:
    """Build the Reflex component tree for a table bound to *state*."""
    body = rx.cond(
        state.body_state == "loading",
        _loading_row(definition),
        rx.cond(
            state.body_state == "empty",
            _empty_row(state, definition),
            rx.foreach(state.rows, lambda row: _data_row(state, definition, row)),
        ),
    )
    table = rx.table.root(
        rx.table.header(_header_row(state, definition)),
        rx.table.body(body),
        variant="surface" if definition.bordered else "ghost",
        size="1" if definition.compact else "2",
        width="100%",
    )
    main = rx.vstack(
        _card_header(state, definition),
        table,
        _pagination(state),
        spacing="4",
        width="100%",
    )
    parts = []
    if definition.searchable or (definition.filterable and definition.filters):
        parts.append(_search_and_filters(state, definition))
    parts.append(rx.card(main, width="100%") if definition.show_card else main)
    parts.append(_delete_dialog(state, definition))
    return rx.vstack(*parts, spacing="4", width="100%")


def render_record_detail(state: Type[RecordDetailMixin], title: str) -> rx.Component:
    """Build the component tree for a read-only record view bound to *state*."""

    def field_item(item: Any) -> rx.Component:
        return rx.data_list.item(
            rx.data_list.label(item["label"]),
            rx.data_list.value(
                rx.cond(
                    item["badge"] != "",
                    rx.badge(item["value"], color_scheme=item["scheme"]),
                    rx.text(item["value"]),
                )
            ),
        )

    body = rx.cond(
        state.loading,
        rx.center(rx.spinner(size="3"), padding_y="8"),
        rx.cond(
            state.error_message != "",
            rx.callout(state.error_message, icon="triangle-alert", color_scheme="red"),
            rx.data_list.root(rx.foreach(state.fields, field_item)),
        ),
    )
    return rx.card(
        rx.vstack(
            rx.hstack(
                rx.button(rx.icon("arrow-left", size=14), "Back", variant="outline", on_click=state.back),
                rx.heading(title, size="5"),
                spacing="3",
                align="center",
            ),
            body,
            spacing="4",
            width="100%",
        ),
        width="100%",
    )
