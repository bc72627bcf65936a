"""
CareerDesk — Record Detail Pages

Routes: the list screens' row links, e.g. /admin/dashboard/jobs/[record_id]
Purpose: Read-only view of one record, with a link back to its list.
"""

from typing import Callable, Type

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, user_layout
from careerdesk.ui.renderer import RecordDetailMixin, render_record_detail


def detail_page(state: Type[RecordDetailMixin], route: str, title: str) -> Callable[[], rx.Component]:
    """Page function for a detail state; routes outside /admin get the user layout."""
    layout = admin_layout if route.startswith("/admin") else user_layout

    def page() -> rx.Component:
        return layout(render_record_detail(state, title))

    page.__name__ = f"{state.__name__.lower()}_page"
    return page
