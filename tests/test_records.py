"""Unit tests for careerdesk.records — row models of the backend tables."""

import pytest
from pydantic import ValidationError

from careerdesk.engine.config import BackendConfig
from careerdesk.engine.record_source import to_row
from careerdesk.records import (
    RECORD_MODELS,
    Job,
    JobStatus,
    JobType,
    MentorshipSession,
)


class TestRecordModels:
    def test_table_names_match_backend_defaults(self):
        tables = BackendConfig().tables
        for table_id, model in RECORD_MODELS.items():
            assert tables[table_id] == model.table_name
            assert model.key_field in model.model_fields

    def test_job_row_for_table(self):
        job = Job(
            job_id="j1",
            title="Backend Engineer",
            job_type="FULL-TIME",
            created_at="2024-03-05T10:30:00Z",
        )
        assert job.status is JobStatus.OPEN
        row = to_row(job)
        assert row["job_type"] == JobType.FULL_TIME.value
        assert row["status"] == "OPEN"

    def test_rating_bounds(self):
        with pytest.raises(ValidationError):
            MentorshipSession(
                session_id="s1", mentor_id="m1", user_id="u1",
                session_rating=6, created_at="2024-03-05T10:30:00Z",
            )
