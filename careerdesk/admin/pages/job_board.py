"""
CareerDesk — Job Board Page

Route: /dashboard/jobs
Purpose: Open positions for candidates; clicking a row opens the posting.
"""

import reflex as rx

from careerdesk.admin.components.layout import user_layout, table_screen
from careerdesk.admin.state import JobBoardState


def job_board_page() -> rx.Component:
    """Job Board list screen."""
    return user_layout(table_screen(JobBoardState, "job_board"))
