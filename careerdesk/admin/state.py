"""
CareerDesk Admin Console — Reflex state for each list screen.

Each screen state binds DataTableMixin to one registered table id; all table
behavior (search, filters, sort, paging, actions, delete) comes from the mixin.
Detail states bind RecordDetailMixin to the table whose rows they open.
"""

from __future__ import annotations

import reflex as rx

from careerdesk.ui.renderer import DataTableMixin, RecordDetailMixin


class AdminJobsState(DataTableMixin, rx.State):
    table_id: str = "admin_jobs"


class AdminCompaniesState(DataTableMixin, rx.State):
    table_id: str = "admin_companies"


class AdminApplicationsState(DataTableMixin, rx.State):
    table_id: str = "admin_applications"


class AdminMentorsState(DataTableMixin, rx.State):
    table_id: str = "admin_mentors"


class AdminMentorshipSessionsState(DataTableMixin, rx.State):
    table_id: str = "admin_mentorship_sessions"


class AdminFreeResourcesState(DataTableMixin, rx.State):
    table_id: str = "admin_free_resources"


class JobBoardState(DataTableMixin, rx.State):
    table_id: str = "job_board"


class MyApplicationsState(DataTableMixin, rx.State):
    table_id: str = "my_applications"


# ---------------------------------------------------------------------------
# Record detail screens
# ---------------------------------------------------------------------------

class AdminJobDetailState(RecordDetailMixin, rx.State):
    table_id: str = "admin_jobs"
    back_route: str = "/admin/dashboard/jobs"


class AdminCompanyDetailState(RecordDetailMixin, rx.State):
    table_id: str = "admin_companies"
    back_route: str = "/admin/dashboard/companies"


class AdminJobApplicationsDetailState(RecordDetailMixin, rx.State):
    table_id: str = "admin_applications"
    back_route: str = "/admin/dashboard/applications"


class AdminMentorDetailState(RecordDetailMixin, rx.State):
    table_id: str = "admin_mentors"
    back_route: str = "/admin/dashboard/mentors"


class AdminMentorshipSessionDetailState(RecordDetailMixin, rx.State):
    table_id: str = "admin_mentorship_sessions"
    back_route: str = "/admin/dashboard/mentorship-sessions"


class JobDetailState(RecordDetailMixin, rx.State):
    table_id: str = "job_board"
    back_route: str = "/dashboard/jobs"


# table id → detail state
DETAIL_STATES = {
    "admin_jobs": AdminJobDetailState,
    "admin_companies": AdminCompanyDetailState,
    "admin_applications": AdminJobApplicationsDetailState,
    "admin_mentors": AdminMentorDetailState,
    "admin_mentorship_sessions": AdminMentorshipSessionDetailState,
    "job_board": JobDetailState,
}
