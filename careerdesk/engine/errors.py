"""
CareerDesk Error Hierarchy — Structured exceptions with serializable context.

Errors carry the table or record reference they relate to so that log
entries and toast messages can point at the failing screen.

Hierarchy:
    CareerDeskError
    ├── CareerDeskValidationError     — Bad declaration or display input
    ├── CareerDeskConfigError         — careerdesk.yaml could not be loaded
    ├── CareerDeskIntegrationError    — Backend (record source) call failed
    └── CareerDeskObjectNotFoundError — Unknown table id, or no record for a key

The tabular data view never raises these while rendering: a failing render
function or callback propagates its own exception unchanged.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class CareerDeskError(Exception):
    """
    Base error for all CareerDesk failures.
    All context is serializable to JSON.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.table_id: Optional[str] = context.get("table_id")
        self.record_key: Optional[str] = context.get("record_key")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "table_id": self.table_id,
            "record_key": self.record_key,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k not in ("table_id", "record_key")
            },
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.table_id:
            parts.append(f"table_id={self.table_id}")
        if self.record_key:
            parts.append(f"record_key={self.record_key}")
        return " | ".join(parts)


class CareerDeskValidationError(CareerDeskError):
    """
    Input validation failed (unknown theme, bad pagination mode, unparseable date).
    Includes field-level error details when available.
    """

    def __init__(self, message: str, **context: Any):
        self.field: Optional[str] = context.get("field")
        self.value: Any = context.get("value")
        self.allowed: Optional[List[str]] = context.get("allowed")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["field"] = self.field
        d["value"] = None if self.value is None else str(self.value)
        d["allowed"] = self.allowed
        return d


class CareerDeskConfigError(CareerDeskError):
    """Configuration error — invalid or unreadable careerdesk.yaml."""

    def __init__(self, message: str, **context: Any):
        self.config_path: Optional[str] = context.get("config_path")
        super().__init__(message, **context)


class CareerDeskIntegrationError(CareerDeskError):
    """Backend call failed (REST table endpoint returned an error or was unreachable)."""

    def __init__(self, message: str, **context: Any):
        self.backend_table: Optional[str] = context.get("backend_table")
        self.status_code: Optional[int] = context.get("status_code")
        self.response_body: Optional[str] = context.get("response_body")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["backend_table"] = self.backend_table
        d["status_code"] = self.status_code
        return d


class CareerDeskObjectNotFoundError(CareerDeskError):
    """Table id not registered, or no record with the requested key."""
    pass
