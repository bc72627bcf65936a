"""
CareerDesk Admin Console — Free Resources Page

Route: /admin/dashboard/free-resources
Purpose: Manage shared learning resources; filter by type.
"""

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, table_screen
from careerdesk.admin.state import AdminFreeResourcesState


def free_resources_page() -> rx.Component:
    """Free Resources list screen."""
    return admin_layout(table_screen(AdminFreeResourcesState, "admin_free_resources"))
