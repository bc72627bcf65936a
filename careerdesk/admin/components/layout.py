"""
CareerDesk Admin Console — Layout components (sidebar + header, user shell).
"""

from typing import Type

import reflex as rx

from careerdesk.engine.config import get_config
from careerdesk.engine.registry import table_registry
from careerdesk.ui.renderer import DataTableMixin, display_handlers, render_data_table
from careerdesk.ui.themes import Palette


def admin_layout(content: rx.Component) -> rx.Component:
    """Wrap content in the admin layout with sidebar and header."""
    return rx.hstack(
        _sidebar(),
        rx.box(
            _header("Admin Dashboard"),
            rx.divider(),
            rx.box(content, padding="6"),
            flex="1",
            overflow_y="auto",
            height="100vh",
        ),
        spacing="0",
        width="100%",
        height="100vh",
    )


def user_layout(content: rx.Component) -> rx.Component:
    """Candidate-facing shell: top bar and centered content."""
    return rx.box(
        rx.hstack(
            rx.heading(get_config().name, size="4", color=Palette.PRIMARY_BLUE),
            rx.spacer(),
            _nav_link("Jobs", "/dashboard/jobs"),
            _nav_link("My Applications", "/dashboard/applied"),
            padding="4",
            width="100%",
            align="center",
            border_bottom="1px solid var(--gray-5)",
        ),
        rx.container(content, size="4", padding_y="6"),
        width="100%",
    )


def table_screen(state: Type[DataTableMixin], table_id: str) -> rx.Component:
    """The data table of a registered screen, bound to its state."""
    definition = table_registry.build_definition(table_id, display_handlers())
    return render_data_table(state, definition)


def _sidebar() -> rx.Component:
    """Admin console sidebar navigation."""
    return rx.box(
        rx.vstack(
            rx.heading(get_config().name, size="4", padding="4", color=Palette.PRIMARY_BLUE),
            rx.divider(),
            _nav_item("Job Postings", "/admin/dashboard/jobs", "briefcase"),
            _nav_item("Companies", "/admin/dashboard/companies", "building-2"),
            _nav_item("Applications", "/admin/dashboard/applications", "file-text"),
            rx.divider(),
            _nav_item("Mentors", "/admin/dashboard/mentors", "graduation-cap"),
            _nav_item("Mentorship Sessions", "/admin/dashboard/mentorship-sessions", "calendar"),
            _nav_item("Free Resources", "/admin/dashboard/free-resources", "book-open"),
            spacing="1",
            padding="3",
            width="100%",
        ),
        width="240px",
        min_width="240px",
        height="100vh",
        border_right="1px solid var(--gray-5)",
        background="var(--gray-2)",
    )


def _nav_item(label: str, href: str, icon: str) -> rx.Component:
    """Render a sidebar nav item."""
    return rx.link(
        rx.hstack(
            rx.icon(icon, size=16),
            rx.text(label, size="2"),
            spacing="2",
            padding_x="3",
            padding_y="2",
            border_radius="6px",
            width="100%",
            _hover={"background": "var(--gray-4)"},
        ),
        href=href,
        width="100%",
        underline="none",
    )


def _nav_link(label: str, href: str) -> rx.Component:
    return rx.link(rx.text(label, size="2"), href=href, underline="none", padding_x="3")


def _header(title: str) -> rx.Component:
    """Admin console top header."""
    return rx.hstack(
        rx.text(title, size="2", weight="medium"),
        rx.spacer(),
        rx.badge(get_config().environment, variant="soft"),
        padding="3",
        width="100%",
        align="center",
    )
