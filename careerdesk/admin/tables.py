"""
CareerDesk list screen tables — one declaration builder per screen.

Builders are pure: they take a TableHandlers bundle and return a
DataTableDef. Row actions that change location return NavigationIntents;
the caller decides how to navigate. ``register_tables`` wires every builder
to its backend table in the registry.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from careerdesk.engine.config import CareerDeskConfig, get_config
from careerdesk.engine.record_source import RestRecordSource
from careerdesk.engine.registry import TableHandlers, TableRegistration, TableRegistry
from careerdesk.records import (
    Application,
    ApplicationStatus,
    Company,
    FreeResource,
    Job,
    JobStatus,
    JobType,
    Mentor,
    MentorshipSession,
    ResourceType,
)
from careerdesk.ui.components import (
    Action,
    ButtonAction,
    Column,
    DataTable,
    DataTableDef,
    DeleteConfirmation,
    Filter,
    NavigationIntent,
    PaginationConfig,
    key_field,
)
from careerdesk.ui.formatting import (
    format_optional_date,
    resource_type_label,
    status_badge,
    theme_badge,
    title_case_code,
    truncate_to_length,
    truncate_to_words,
    type_badge,
)
from careerdesk.ui.themes import Theme

logger = logging.getLogger("careerdesk.admin.tables")


def _page_size() -> int:
    return get_config().ui.default_page_size


def _pagination(handlers: TableHandlers, mode: str) -> PaginationConfig:
    return PaginationConfig(
        enabled=True,
        page_size=_page_size(),
        on_page_change=handlers.page_change,
        mode=mode,
    )


def _add(label: str, handlers: TableHandlers, icon: str = "plus") -> Optional[ButtonAction]:
    if handlers.add is None:
        return None
    return ButtonAction(label=label, on_click=handlers.add, icon=icon)


def _posted(record: Dict[str, Any]) -> str:
    return format_optional_date(record.get("created_at"), placeholder="N/A")


def _enum_options(enum_cls, labels: Optional[Dict[str, str]] = None) -> List[tuple]:
    labels = labels or {}
    return [(m.value, labels.get(m.value, title_case_code(m.value))) for m in enum_cls]


# ---------------------------------------------------------------------------
# Admin screens
# ---------------------------------------------------------------------------

def jobs_table(handlers: TableHandlers) -> DataTableDef:
    """Admin job postings: full list, filtered by status and type."""
    return DataTable(
        columns=[
            Column("title", "Job Details", width="30%"),
            Column("company_name", "Company"),
            Column("location", "Location"),
            Column("job_type", "Type", render=lambda j: type_badge(j["job_type"])),
            Column("salary", "Salary", render=lambda j: j.get("salary") or "Not specified"),
            Column("status", "Status", render=lambda j: status_badge(j["status"])),
            Column("created_at", "Posted Date", render=_posted),
        ],
        row_key=key_field(Job.key_field),
        title="Job Postings",
        title_icon="briefcase",
        subtitle="Manage job postings across all companies",
        actions=[
            Action(
                "View Details",
                lambda j: NavigationIntent(f"/admin/dashboard/jobs/{j['job_id']}"),
                icon="eye",
            ),
            Action(
                "Share",
                lambda j: NavigationIntent(f"/dashboard/jobs/{j['job_id']}", new_tab=True),
                icon="share-2",
            ),
        ],
        searchable=True,
        search_placeholder="Search jobs...",
        search_keys=["title", "description", "company_name", "location"],
        filterable=True,
        filters=[
            Filter("status", "Statuses", _enum_options(JobStatus)),
            Filter("job_type", "Types", _enum_options(JobType, {
                JobType.FULL_TIME.value: "Full Time",
                JobType.PART_TIME.value: "Part Time",
            })),
        ],
        sortable=True,
        pagination=_pagination(handlers, "client"),
        empty_message="No job postings found. Create your first job posting to get started.",
        empty_icon="briefcase",
        empty_action=_add("Add New Job", handlers),
        add_action=_add("Add New Job", handlers),
        on_delete=handlers.delete,
        delete_confirmation=DeleteConfirmation(
            title="Delete Job Posting",
            description="This will permanently delete the job posting. This action cannot be undone.",
        ),
        on_refresh=handlers.refresh,
        show_row_numbers=True,
        theme=Theme.PRIMARY,
    )


def companies_table(handlers: TableHandlers) -> DataTableDef:
    return DataTable(
        columns=[
            Column("name", "Company"),
            Column("description", "Description",
                   render=lambda c: truncate_to_words(c.get("description"), 8)),
            Column("website_url", "Website", render=lambda c: c.get("website_url") or "N/A"),
            Column("created_at", "Created", render=_posted),
        ],
        row_key=key_field(Company.key_field),
        title="All Companies",
        title_icon="building-2",
        actions=[
            Action(
                "View Details",
                lambda c: NavigationIntent(f"/admin/dashboard/companies/{c['company_id']}"),
                icon="eye",
            ),
        ],
        searchable=True,
        search_placeholder="Search companies...",
        search_keys=["name", "description"],
        sortable=True,
        pagination=_pagination(handlers, "server"),
        empty_message="No companies found",
        empty_icon="building-2",
        empty_action=_add("Add Company", handlers),
        add_action=_add("Add Company", handlers),
        on_delete=handlers.delete,
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


def applications_table(handlers: TableHandlers) -> DataTableDef:
    """Jobs with applicant counts; each row opens that job's applicants."""

    def view_applications(job: Dict[str, Any]) -> NavigationIntent:
        return NavigationIntent(f"/admin/dashboard/applications/{job['job_id']}")

    return DataTable(
        columns=[
            Column("title", "Job Title"),
            Column(
                "applicant_count",
                "Applications",
                render=lambda j: theme_badge(f"{j.get('applicant_count') or 0} applicants", Theme.PRIMARY),
                align="center",
            ),
            Column("company_name", "Company"),
            Column("created_at", "Posted Date", render=_posted),
        ],
        row_key=key_field(Job.key_field),
        title="All Jobs",
        title_icon="file-text",
        actions=[Action("View Applications", view_applications, icon="users")],
        searchable=True,
        search_keys=["title", "company_name"],
        sortable=True,
        pagination=_pagination(handlers, "server"),
        empty_message="No jobs found",
        on_row_click=view_applications,
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


def mentors_table(handlers: TableHandlers) -> DataTableDef:
    return DataTable(
        columns=[
            Column("full_name", "Mentor"),
            Column("domain", "Domain", render=lambda m: theme_badge(m.get("domain") or "General", Theme.PRIMARY)),
            Column("experience_years", "Experience",
                   render=lambda m: f"{m.get('experience_years') or 0} years"),
            Column("bio", "Bio", render=lambda m: truncate_to_length(m.get("bio"), 60), sortable=False),
            Column("created_at", "Joined", render=_posted),
        ],
        row_key=key_field(Mentor.key_field),
        title="All Mentors",
        title_icon="graduation-cap",
        subtitle="Manage career mentors and their expertise",
        actions=[
            Action(
                "View Details",
                lambda m: NavigationIntent(f"/admin/dashboard/mentors/{m['mentor_id']}"),
                icon="eye",
            ),
        ],
        searchable=True,
        search_keys=["domain", "bio"],
        sortable=True,
        pagination=_pagination(handlers, "server"),
        empty_message="No mentors found",
        empty_action=_add("Add Mentor", handlers),
        add_action=_add("Add Mentor", handlers),
        on_delete=handlers.delete,
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


def _rating(session: Dict[str, Any]) -> str:
    rating = session.get("session_rating")
    return f"{rating}/5" if rating else "Not rated"


def mentorship_sessions_table(handlers: TableHandlers) -> DataTableDef:
    return DataTable(
        columns=[
            Column("mentor_name", "Mentor"),
            Column("mentee_name", "Mentee"),
            Column("session_type", "Type", render=lambda s: title_case_code(s.get("session_type") or "")),
            Column("status", "Status", render=lambda s: status_badge(s["status"])),
            Column("scheduled_at", "Scheduled",
                   render=lambda s: format_optional_date(s.get("scheduled_at"), placeholder="Not scheduled")),
            Column("session_rating", "Rating", render=_rating, align="center"),
        ],
        row_key=key_field(MentorshipSession.key_field),
        title="All Sessions",
        title_icon="calendar",
        subtitle="Track and manage mentorship sessions",
        actions=[
            Action(
                "View Details",
                lambda s: NavigationIntent(f"/admin/dashboard/mentorship-sessions/{s['session_id']}"),
                icon="eye",
            ),
        ],
        searchable=True,
        search_keys=["session_type", "status"],
        sortable=True,
        pagination=_pagination(handlers, "server"),
        empty_message="No sessions found",
        empty_action=_add("Schedule Session", handlers, icon="calendar-plus"),
        add_action=_add("Schedule Session", handlers, icon="calendar-plus"),
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


def _download(resource: Dict[str, Any]) -> NavigationIntent:
    return NavigationIntent(resource["resource_url"], new_tab=True, external=True)


def free_resources_table(handlers: TableHandlers) -> DataTableDef:
    return DataTable(
        columns=[
            Column("title", "Resource"),
            Column(
                "resource_type",
                "Type",
                render=lambda r: theme_badge(resource_type_label(r["resource_type"]), Theme.PRIMARY),
            ),
            Column("created_by_name", "Created By"),
            Column("created_at", "Created", render=_posted),
        ],
        row_key=key_field(FreeResource.key_field),
        title="All Resources",
        title_icon="book-open",
        subtitle="Manage and share free learning resources",
        actions=[
            Action("Download", _download, icon="download",
                   disabled=lambda r: not r.get("resource_url")),
        ],
        searchable=True,
        search_keys=["title", "description", "resource_type"],
        filterable=True,
        filters=[
            Filter("resource_type", "Types",
                   [(t.value, resource_type_label(t)) for t in ResourceType]),
        ],
        sortable=True,
        pagination=_pagination(handlers, "server"),
        empty_message="No resources found",
        empty_icon="book-open",
        empty_action=_add("Add Resource", handlers),
        add_action=_add("Add Resource", handlers),
        on_delete=handlers.delete,
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


# ---------------------------------------------------------------------------
# User screens
# ---------------------------------------------------------------------------

def job_board_table(handlers: TableHandlers) -> DataTableDef:
    """Open positions for candidates; clicking a row opens the posting."""

    def view_job(job: Dict[str, Any]) -> NavigationIntent:
        return NavigationIntent(f"/dashboard/jobs/{job['job_id']}")

    return DataTable(
        columns=[
            Column("title", "Position"),
            Column("location", "Location"),
            Column("job_type", "Type", render=lambda j: type_badge(j["job_type"])),
            Column("status", "Status", render=lambda j: status_badge(j["status"])),
            Column("created_at", "Posted", render=_posted),
        ],
        row_key=key_field(Job.key_field),
        title="Job Postings",
        title_icon="briefcase",
        actions=[Action("View Details", view_job, icon="eye")],
        searchable=True,
        search_keys=["title", "location", "company_name"],
        sortable=True,
        pagination=_pagination(handlers, "server"),
        empty_message="No job postings found",
        empty_icon="briefcase",
        on_row_click=view_job,
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


def my_applications_table(handlers: TableHandlers) -> DataTableDef:
    def view_job(application: Dict[str, Any]) -> NavigationIntent:
        return NavigationIntent(f"/dashboard/jobs/{application['job_id']}")

    return DataTable(
        columns=[
            Column("job_title", "Job Position"),
            Column("application_date", "Applied Date",
                   render=lambda a: format_optional_date(a.get("application_date"), placeholder="N/A")),
            Column("status", "Status", render=lambda a: status_badge(a["status"])),
        ],
        row_key=key_field(Application.key_field),
        title="My Applications",
        title_icon="send",
        actions=[
            Action("View Details", view_job, icon="eye"),
            Action(
                "Download Resume",
                lambda a: NavigationIntent(a["resume_url"], new_tab=True, external=True),
                icon="download",
                disabled=lambda a: not a.get("resume_url"),
            ),
        ],
        searchable=True,
        search_keys=["job_title"],
        filterable=True,
        filters=[
            Filter("status", "Statuses", _enum_options(ApplicationStatus, {
                ApplicationStatus.SHARED_WITH_COMPANY.value: "Shared with Company",
            })),
        ],
        sortable=True,
        pagination=_pagination(handlers, "client"),
        empty_message="No applications found",
        empty_icon="send",
        empty_action=ButtonAction(
            label="Browse Jobs",
            on_click=lambda: NavigationIntent("/dashboard/jobs"),
            icon="search",
        ),
        on_row_click=view_job,
        on_refresh=handlers.refresh,
        theme=Theme.PRIMARY,
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

# table id → (builder, backend table id, key field, order, route)
SCREEN_TABLES = {
    "admin_jobs": (jobs_table, "jobs", Job.key_field, "created_at.desc", "/admin/dashboard/jobs"),
    "admin_companies": (companies_table, "companies", Company.key_field, "created_at.desc",
                        "/admin/dashboard/companies"),
    "admin_applications": (applications_table, "jobs", Job.key_field, "created_at.desc",
                           "/admin/dashboard/applications"),
    "admin_mentors": (mentors_table, "mentors", Mentor.key_field, "created_at.desc",
                      "/admin/dashboard/mentors"),
    "admin_mentorship_sessions": (mentorship_sessions_table, "mentorship_sessions",
                                  MentorshipSession.key_field, "scheduled_at.desc",
                                  "/admin/dashboard/mentorship-sessions"),
    "admin_free_resources": (free_resources_table, "free_resources", FreeResource.key_field,
                             "created_at.desc", "/admin/dashboard/free-resources"),
    "job_board": (job_board_table, "jobs", Job.key_field, "created_at.desc", "/dashboard/jobs"),
    "my_applications": (my_applications_table, "applications", Application.key_field,
                        "application_date.desc", "/dashboard/applied"),
}


# table id → (detail route, detail title). Row actions and row clicks link here.
DETAIL_ROUTES = {
    "admin_jobs": ("/admin/dashboard/jobs/[record_id]", "Job Posting"),
    "admin_companies": ("/admin/dashboard/companies/[record_id]", "Company"),
    "admin_applications": ("/admin/dashboard/applications/[record_id]", "Job Applications"),
    "admin_mentors": ("/admin/dashboard/mentors/[record_id]", "Mentor"),
    "admin_mentorship_sessions": ("/admin/dashboard/mentorship-sessions/[record_id]", "Mentorship Session"),
    "job_board": ("/dashboard/jobs/[record_id]", "Job Posting"),
}


def _rest_source_factory(config: CareerDeskConfig, backend_table_id: str, key: str, order: str):
    def factory() -> RestRecordSource:
        backend = config.backend
        return RestRecordSource(
            base_url=backend.url,
            table=backend.tables.get(backend_table_id, backend_table_id),
            key_field=key,
            api_key=backend.api_key,
            order=order,
            timeout=backend.timeout,
        )

    return factory


def register_tables(registry: TableRegistry, config: Optional[CareerDeskConfig] = None) -> int:
    """Register every screen table with a REST record source. Returns the count."""
    config = config or get_config()
    for table_id, (builder, backend_table_id, key, order, route) in SCREEN_TABLES.items():
        registry.register(
            TableRegistration(
                table_id=table_id,
                builder=builder,
                source_factory=_rest_source_factory(config, backend_table_id, key, order),
                route=route,
                metadata={"backend_table": config.backend.tables.get(backend_table_id, backend_table_id)},
            )
        )
    logger.info(f"Registered {len(SCREEN_TABLES)} screen tables")
    return len(SCREEN_TABLES)
