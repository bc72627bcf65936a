"""
CareerDesk — Main Reflex application entry point.

Boot sequence:
    1. _init_platform() — load careerdesk.yaml, start file logging
    2. register_tables() — bind every list screen to its backend table
    3. Create rx.App() and add the admin and user pages; each page's
       on_load fetches its table
    4. Add a read-only detail page for every table whose rows link to one
"""

import logging

import reflex as rx

from careerdesk.admin.pages.applications import applications_page
from careerdesk.admin.pages.companies import companies_page
from careerdesk.admin.pages.details import detail_page
from careerdesk.admin.pages.free_resources import free_resources_page
from careerdesk.admin.pages.job_board import job_board_page
from careerdesk.admin.pages.jobs import jobs_page
from careerdesk.admin.pages.mentors import mentors_page
from careerdesk.admin.pages.mentorship_sessions import mentorship_sessions_page
from careerdesk.admin.pages.my_applications import my_applications_page
from careerdesk.admin.state import (
    DETAIL_STATES,
    AdminApplicationsState,
    AdminCompaniesState,
    AdminFreeResourcesState,
    AdminJobsState,
    AdminMentorshipSessionsState,
    AdminMentorsState,
    JobBoardState,
    MyApplicationsState,
)
from careerdesk.admin.tables import DETAIL_ROUTES, register_tables
from careerdesk.engine.config import load_config
from careerdesk.engine.logging import LogRetentionManager, init_logging
from careerdesk.engine.registry import table_registry

logger = logging.getLogger("careerdesk.startup")

# Guard: only initialize once, even if the module is re-imported
_platform_initialized = False


def _init_platform() -> None:
    """Load config, start logging, register tables."""
    global _platform_initialized
    if _platform_initialized:
        return
    _platform_initialized = True

    config = load_config()
    init_logging(config.logging.directory, config.logging.level)
    retention = config.logging.retention
    LogRetentionManager(
        config.logging.directory,
        {
            "interaction": retention.interaction_days,
            "execution": retention.interaction_days,
            "security": retention.security_days,
        },
    ).cleanup()
    register_tables(table_registry, config)
    logger.info(f"{config.name} {config.version} ({config.environment}) initialized")


_init_platform()


app = rx.App()

app.add_page(jobs_page, route="/admin/dashboard/jobs", title="CareerDesk Admin — Job Postings",
             on_load=AdminJobsState.load)
app.add_page(companies_page, route="/admin/dashboard/companies", title="CareerDesk Admin — Companies",
             on_load=AdminCompaniesState.load)
app.add_page(applications_page, route="/admin/dashboard/applications",
             title="CareerDesk Admin — Applications", on_load=AdminApplicationsState.load)
app.add_page(mentors_page, route="/admin/dashboard/mentors", title="CareerDesk Admin — Mentors",
             on_load=AdminMentorsState.load)
app.add_page(mentorship_sessions_page, route="/admin/dashboard/mentorship-sessions",
             title="CareerDesk Admin — Mentorship Sessions", on_load=AdminMentorshipSessionsState.load)
app.add_page(free_resources_page, route="/admin/dashboard/free-resources",
             title="CareerDesk Admin — Free Resources", on_load=AdminFreeResourcesState.load)
app.add_page(job_board_page, route="/dashboard/jobs", title="CareerDesk — Jobs",
             on_load=JobBoardState.load)
app.add_page(my_applications_page, route="/dashboard/applied", title="CareerDesk — My Applications",
             on_load=MyApplicationsState.load)

# Read-only record pages behind row actions and row clicks
for _table_id, (_route, _title) in DETAIL_ROUTES.items():
    _state = DETAIL_STATES[_table_id]
    app.add_page(detail_page(_state, _route, _title), route=_route, title=f"CareerDesk — {_title}",
                 on_load=_state.load)

# Root redirects
app.add_page(lambda: rx.fragment(), route="/admin", on_load=rx.redirect("/admin/dashboard/jobs"))
app.add_page(lambda: rx.fragment(), route="/admin/dashboard", on_load=rx.redirect("/admin/dashboard/jobs"))
app.add_page(lambda: rx.fragment(), route="/", on_load=rx.redirect("/dashboard/jobs"))
