"""
CareerDesk Admin Console — Applications Page

Route: /admin/dashboard/applications
Purpose: Jobs with applicant counts; rows open the job's applicants.
"""

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, table_screen
from careerdesk.admin.state import AdminApplicationsState


def applications_page() -> rx.Component:
    """Applications list screen."""
    return admin_layout(table_screen(AdminApplicationsState, "admin_applications"))
