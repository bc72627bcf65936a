"""
CareerDesk Admin Console — Companies Page

Route: /admin/dashboard/companies
Purpose: Browse hiring companies (server-paged).
"""

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, table_screen
from careerdesk.admin.state import AdminCompaniesState


def companies_page() -> rx.Component:
    return admin_layout(table_screen(AdminCompaniesState, "admin_companies"))
