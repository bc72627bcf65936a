"""
CareerDesk Admin Console — Mentors Page

Route: /admin/dashboard/mentors
Purpose: Career mentors and their expertise.
"""

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, table_screen
from careerdesk.admin.state import AdminMentorsState


def mentors_page() -> rx.Component:
    return admin_layout(table_screen(AdminMentorsState, "admin_mentors"))
