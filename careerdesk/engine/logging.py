"""
CareerDesk Logging — Structured JSON file-based logging for table screens.

Implements:
- FileLogger: Per-object-type, per-category log files (daily rotation)
- LogRetentionManager: Deletes files older than the configured retention
- Log entry builders for table interactions, confirmed deletes and
  record source calls

Files live at {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("careerdesk.engine.logging")

# Valid object types and their permitted categories
OBJECT_TYPE_CATEGORIES = {
    "tables": ["interaction", "security"],
    "record_sources": ["execution", "security"],
}

# Retention defaults (days)
DEFAULT_RETENTION = {
    "interaction": 30,
    "execution": 30,
    "security": 365,
}


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("object_type", "category", "data")

    def __init__(self, object_type: str, category: str, data: Dict[str, Any]):
        self.object_type = object_type
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-object-type, per-category files.

    Thread-safe — uses a lock per file path.
    """

    def __init__(self, log_dir: str = "logs"):
        self._log_dir = Path(log_dir)
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Create the full directory tree for all object types and categories."""
        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / obj_type / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        if entry.category not in OBJECT_TYPE_CATEGORIES.get(entry.object_type, []):
            raise ValueError(
                f"Invalid log target {entry.object_type}/{entry.category}"
            )
        file_path = self._resolve_path(entry.object_type, entry.category)
        key = str(file_path)

        with self._file_locks[key]:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json())
                f.write("\n")

    def _resolve_path(self, object_type: str, category: str) -> Path:
        """Resolve the log file path for today's date."""
        today = date.today().isoformat()
        return self._log_dir / object_type / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def query(
        self,
        object_type: str,
        category: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        filters: Optional[Dict[str, Any]] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        """
        Query log entries from JSONL files for a given object_type/category.

        Args:
            object_type: The object type folder (e.g. "tables").
            category: The category folder (e.g. "interaction", "security").
            start_date: Earliest date to include (defaults to 7 days ago).
            end_date: Latest date to include (defaults to today).
            filters: Only entries matching ALL key/value pairs are returned.
            limit: Max number of entries to return.

        Returns:
            List of parsed log-entry dicts, newest first.
        """
        if end_date is None:
            end_date = date.today()
        if start_date is None:
            start_date = end_date - timedelta(days=7)

        log_base = self._log_dir / object_type / category
        if not log_base.exists():
            return []

        results: List[Dict[str, Any]] = []
        current = end_date
        while current >= start_date and len(results) < limit:
            file_path = log_base / f"{current.isoformat()}.jsonl"
            if file_path.exists():
                # Newest first within a file
                entries = self._read_jsonl(file_path, filters)
                entries.reverse()
                results.extend(entries[: limit - len(results)])
            current -= timedelta(days=1)

        return results[:limit]

    @staticmethod
    def _read_jsonl(
        path: Path,
        filters: Optional[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        """Read all matching entries from a .jsonl file."""
        entries: List[Dict[str, Any]] = []
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if filters and not all(data.get(k) == v for k, v in filters.items()):
                        continue
                    entries.append(data)
        except OSError as exc:
            logger.warning("Could not read log file %s: %s", path, exc)
        return entries


class LogRetentionManager:
    """Deletes log files older than configured retention periods."""

    def __init__(
        self,
        log_dir: str = "logs",
        retention_days: Optional[Dict[str, int]] = None,
    ):
        self._log_dir = Path(log_dir)
        self._retention = retention_days or DEFAULT_RETENTION.copy()

    def cleanup(self, today: Optional[date] = None) -> int:
        """
        Run retention cleanup across all log directories.

        Returns:
            Number of files deleted.
        """
        deleted = 0
        today = today or date.today()

        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                cat_dir = self._log_dir / obj_type / cat
                if not cat_dir.exists():
                    continue

                retention = self._retention.get(cat, 30)
                for file_path in cat_dir.iterdir():
                    if not file_path.is_file():
                        continue
                    file_date = self._parse_file_date(file_path)
                    if file_date is None:
                        continue
                    if (today - file_date).days > retention:
                        file_path.unlink()
                        deleted += 1

        logger.info(f"Log cleanup: deleted {deleted} files")
        return deleted

    @staticmethod
    def _parse_file_date(file_path: Path) -> Optional[date]:
        """Extract date from filename like 2026-02-12.jsonl."""
        try:
            return date.fromisoformat(file_path.name.split(".")[0])
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(
    event: str,
    level: str,
    table_id: str,
    user_id: Optional[Any] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a base log entry with common fields."""
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
        "table_id": table_id,
    }
    if user_id is not None:
        entry["user_id"] = user_id
    entry.update(extra)
    return entry


def log_table_interaction(
    table_id: str,
    interaction: str,
    user_id: Optional[Any] = None,
    **details: Any,
) -> LogEntry:
    """Build a table interaction entry (search, filter, sort, page, clear_all, refresh)."""
    data = _base_entry(
        event="table_interaction",
        level="INFO",
        table_id=table_id,
        user_id=user_id,
        interaction=interaction,
        **details,
    )
    return LogEntry("tables", "interaction", data)


def log_table_delete(
    table_id: str,
    record_key: Any,
    user_id: Optional[Any] = None,
) -> LogEntry:
    """Build a confirmed-delete entry. Deletes are kept with security retention."""
    data = _base_entry(
        event="record_delete_confirmed",
        level="WARNING",
        table_id=table_id,
        user_id=user_id,
        record_key=str(record_key),
    )
    return LogEntry("tables", "security", data)


def log_record_source_call(
    backend_table: str,
    operation: str,
    duration_ms: float,
    success: bool,
    status_code: Optional[int] = None,
    error: Optional[str] = None,
) -> LogEntry:
    """Build a record source call entry (fetch_page, fetch_all, delete)."""
    data = _base_entry(
        event="record_source_call",
        level="INFO" if success else "ERROR",
        table_id=backend_table,
        operation=operation,
        duration_ms=round(duration_ms, 2),
        success=success,
    )
    if status_code is not None:
        data["status_code"] = status_code
    if error:
        data["error"] = error
    return LogEntry("record_sources", "execution", data)


# ---------------------------------------------------------------------------
# Convenience: Global File Logger Singleton
# ---------------------------------------------------------------------------

_global_logger: Optional[FileLogger] = None


def init_logging(log_dir: str = "logs", level: str = "INFO") -> FileLogger:
    """Initialize the global file logger and the ``careerdesk`` logger level."""
    global _global_logger
    logging.getLogger("careerdesk").setLevel(level.upper())
    _global_logger = FileLogger(log_dir=log_dir)
    return _global_logger


def get_file_logger() -> Optional[FileLogger]:
    """Get the global file logger."""
    return _global_logger


def log(entry: LogEntry) -> bool:
    """Write a log entry through the global file logger."""
    if _global_logger is None:
        logger.debug("File logger not initialized — entry dropped")
        return False
    _global_logger.write(entry)
    return True


def shutdown_logging() -> None:
    """Drop the global file logger."""
    global _global_logger
    _global_logger = None
