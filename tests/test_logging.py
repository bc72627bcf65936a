"""Unit tests for careerdesk.engine.logging — FileLogger, LogRetentionManager, entry builders."""

import json
from datetime import date, timedelta

import pytest

from careerdesk.engine.logging import (
    DEFAULT_RETENTION,
    OBJECT_TYPE_CATEGORIES,
    FileLogger,
    LogEntry,
    LogRetentionManager,
    get_file_logger,
    init_logging,
    log,
    log_record_source_call,
    log_table_delete,
    log_table_interaction,
    shutdown_logging,
)


class TestObjectTypeCategories:
    def test_known_types(self):
        assert set(OBJECT_TYPE_CATEGORIES) == {"tables", "record_sources"}

    def test_retention_covers_every_category(self):
        categories = {c for cats in OBJECT_TYPE_CATEGORIES.values() for c in cats}
        assert categories <= set(DEFAULT_RETENTION)


class TestEntryBuilders:
    def test_table_interaction(self):
        entry = log_table_interaction("admin_jobs", "search", search_term="eng")
        assert (entry.object_type, entry.category) == ("tables", "interaction")
        assert entry.data["event"] == "table_interaction"
        assert entry.data["interaction"] == "search"
        assert entry.data["search_term"] == "eng"
        assert "user_id" not in entry.data

    def test_table_delete(self):
        entry = log_table_delete("admin_companies", 42, user_id="u1")
        assert entry.category == "security"
        assert entry.data["level"] == "WARNING"
        assert entry.data["record_key"] == "42"
        assert entry.data["user_id"] == "u1"

    def test_record_source_call(self):
        ok = log_record_source_call("jobs", "fetch_page", 12.3456, True, status_code=206)
        assert ok.data["level"] == "INFO"
        assert ok.data["duration_ms"] == 12.35
        assert ok.data["status_code"] == 206
        assert "error" not in ok.data

        failed = log_record_source_call("jobs", "delete", 3.0, False, error="timeout")
        assert failed.data["level"] == "ERROR"
        assert failed.data["error"] == "timeout"


class TestFileLogger:
    def test_write_creates_file(self, tmp_path):
        logger = FileLogger(log_dir=str(tmp_path / "logs"))
        logger.write(log_table_interaction("job_board", "sort", sort_key="title"))

        log_dir = tmp_path / "logs" / "tables" / "interaction"
        files = list(log_dir.glob("*.jsonl"))
        assert len(files) == 1
        parsed = json.loads(files[0].read_text().strip())
        assert parsed["sort_key"] == "title"

    def test_invalid_target(self, tmp_path):
        logger = FileLogger(log_dir=str(tmp_path))
        with pytest.raises(ValueError, match="Invalid log target"):
            logger.write(LogEntry("tables", "execution", {}))

    def test_query_newest_first_with_filters(self, tmp_path):
        logger = FileLogger(log_dir=str(tmp_path))
        logger.write(log_table_interaction("admin_jobs", "search"))
        logger.write(log_table_interaction("job_board", "search"))
        logger.write(log_table_interaction("admin_jobs", "sort"))

        results = logger.query("tables", "interaction", filters={"table_id": "admin_jobs"})
        assert [r["interaction"] for r in results] == ["sort", "search"]

    def test_query_missing_directory(self, tmp_path):
        assert FileLogger(log_dir=str(tmp_path)).query("nothing", "here") == []


class TestLogRetentionManager:
    def test_deletes_only_expired_files(self, tmp_path):
        FileLogger(log_dir=str(tmp_path))
        today = date(2026, 3, 1)
        interaction = tmp_path / "tables" / "interaction"
        security = tmp_path / "tables" / "security"
        old = interaction / f"{(today - timedelta(days=31)).isoformat()}.jsonl"
        recent = interaction / f"{(today - timedelta(days=5)).isoformat()}.jsonl"
        kept_security = security / f"{(today - timedelta(days=31)).isoformat()}.jsonl"
        stray = interaction / "notes.txt"
        for path in (old, recent, kept_security, stray):
            path.write_text("{}\n")

        deleted = LogRetentionManager(log_dir=str(tmp_path)).cleanup(today=today)

        assert deleted == 1
        assert not old.exists()
        assert recent.exists()
        assert kept_security.exists()
        assert stray.exists()


class TestGlobalLogger:
    def test_log_without_init_drops(self):
        assert get_file_logger() is None
        assert log(log_table_interaction("t", "search")) is False

    def test_init_and_shutdown(self, tmp_path):
        file_logger = init_logging(str(tmp_path), level="debug")
        assert get_file_logger() is file_logger
        assert log(log_table_interaction("t", "refresh")) is True
        shutdown_logging()
        assert get_file_logger() is None
