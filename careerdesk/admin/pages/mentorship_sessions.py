"""
CareerDesk Admin Console — Mentorship Sessions Page

Route: /admin/dashboard/mentorship-sessions
Purpose: Track booked mentorship sessions.
"""

import reflex as rx

from careerdesk.admin.components.layout import admin_layout, table_screen
from careerdesk.admin.state import AdminMentorshipSessionsState


def mentorship_sessions_page() -> rx.Component:
    """Mentorship Sessions list screen."""
    return admin_layout(table_screen(AdminMentorshipSessionsState, "admin_mentorship_sessions"))
