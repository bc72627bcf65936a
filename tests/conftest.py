"""
CareerDesk Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest


# ---------------------------------------------------------------------------
# Environment setup: no backend, no log files unless a test asks for them
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset global singletons between tests."""
    import careerdesk.engine.config as cfg_mod
    from careerdesk.engine.logging import shutdown_logging

    cfg_mod._config = None
    shutdown_logging()
    yield
    cfg_mod._config = None
    shutdown_logging()


@pytest.fixture
def project_root(tmp_path):
    """
    Create a minimal project tree with careerdesk.yaml.
    Returns the root Path.
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "careerdesk.yaml").write_text(
        "platform:\n"
        "  name: TestDesk\n"
        "  version: '2.0.0'\n"
        "  environment: staging\n"
        "backend:\n"
        "  url: https://db.example.com\n"
        "  api_key_env: TEST_CAREERDESK_KEY\n"
        "ui:\n"
        "  default_page_size: 5\n"
        "  default_theme: primary\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def event_sink():
    """Collects table log entries instead of writing files."""
    entries: List[Any] = []

    def sink(entry):
        entries.append(entry)
        return True

    sink.entries = entries
    return sink


@pytest.fixture
def jobs() -> List[Dict[str, Any]]:
    """Job rows as the backend returns them, deliberately out of order."""
    return [
        {"job_id": "j1", "title": "Backend Engineer", "company_name": "Acme",
         "job_type": "FULL-TIME", "status": "OPEN", "created_at": "2024-03-05T10:30:00Z"},
        {"job_id": "j2", "title": "Data Analyst", "company_name": "Globex",
         "job_type": "PART-TIME", "status": "CLOSED", "created_at": "2024-01-15T08:00:00Z"},
        {"job_id": "j3", "title": "Frontend Engineer", "company_name": "Initech",
         "job_type": "FULL-TIME", "status": "OPEN", "created_at": "2024-02-20T12:00:00Z"},
        {"job_id": "j4", "title": "Design Intern", "company_name": "acme labs",
         "job_type": "INTERNSHIP", "status": "ARCHIVED", "created_at": "2023-11-01T09:00:00Z"},
        {"job_id": "j5", "title": "Contract Recruiter", "company_name": None,
         "job_type": "CONTRACT", "status": "OPEN", "created_at": "2024-04-01T00:00:00Z"},
    ]


@pytest.fixture
def many_rows() -> List[Dict[str, Any]]:
    """25 simple rows keyed by id, for paging tests."""
    return [{"id": i, "name": f"Row {i:02d}", "score": i % 7} for i in range(1, 26)]
