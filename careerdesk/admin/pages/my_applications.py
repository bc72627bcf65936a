"""
CareerDesk — My Applications Page

Route: /dashboard/applied
Purpose: A candidate's applications, filterable by status.
"""

import reflex as rx

from careerdesk.admin.components.layout import user_layout, table_screen
from careerdesk.admin.state import MyApplicationsState


def my_applications_page() -> rx.Component:
    """My Applications list screen."""
    return user_layout(table_screen(MyApplicationsState, "my_applications"))
