"""
CareerDesk Admin Console — Job Postings Page

Route: /admin/dashboard/jobs
Purpose: Search, filter and manage every job posting.
"""

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, table_screen
from careerdesk.admin.state import AdminJobsState


def jobs_page() -> rx.Component:
    """Job Postings list screen."""
    return admin_layout(table_screen(AdminJobsState, "admin_jobs"))
