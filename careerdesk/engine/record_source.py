"""
CareerDesk Record Sources — where list screens get their rows from.

A record source hands the table view either the complete list (client-side
paging) or one page plus the remote total (server-side paging), and performs
deletes after the user confirms them. The view itself never talks to a source.

Implementations:
    InMemoryRecordSource — fixed list, used by previews and tests
    RestRecordSource     — backend tables over the PostgREST-style REST API
                           exposed by the managed backend (httpx.AsyncClient)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

import httpx
from pydantic import BaseModel

from careerdesk.engine.errors import CareerDeskIntegrationError, CareerDeskObjectNotFoundError
from careerdesk.engine.logging import log, log_record_source_call

logger = logging.getLogger("careerdesk.engine.record_source")


@dataclass
class RecordPage:
    """One fetch result: the rows plus the total number of rows upstream."""
    records: List[Dict[str, Any]] = field(default_factory=list)
    total_count: int = 0


class RecordSource(Protocol):
    async def fetch_all(self) -> RecordPage: ...

    async def fetch_page(self, page: int, page_size: int) -> RecordPage: ...

    async def fetch_one(self, key: Any) -> Dict[str, Any]: ...

    async def delete(self, key: Any) -> None: ...


def to_row(record: Any) -> Dict[str, Any]:
    """Plain dict for a record: pydantic models are dumped in JSON mode."""
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    return dict(record)


class InMemoryRecordSource:
    """Serves a fixed list of records. Deletes remove from the list."""

    def __init__(self, records: Iterable[Any], key_field: str):
        self._records = [to_row(r) for r in records]
        self.key_field = key_field

    async def fetch_all(self) -> RecordPage:
        return RecordPage(records=list(self._records), total_count=len(self._records))

    async def fetch_page(self, page: int, page_size: int) -> RecordPage:
        start = max(0, (page - 1) * page_size)
        return RecordPage(
            records=self._records[start:start + page_size],
            total_count=len(self._records),
        )

    async def fetch_one(self, key: Any) -> Dict[str, Any]:
        for record in self._records:
            if str(record.get(self.key_field)) == str(key):
                return dict(record)
        raise CareerDeskObjectNotFoundError(
            f"No record with {self.key_field}={key!r}",
            record_key=str(key),
        )

    async def delete(self, key: Any) -> None:
        for index, record in enumerate(self._records):
            if record.get(self.key_field) == key:
                del self._records[index]
                return
        raise CareerDeskObjectNotFoundError(
            f"No record with {self.key_field}={key!r}",
            record_key=str(key),
        )


def parse_content_range(header: Optional[str]) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """
    Parse a ``Content-Range`` header as sent by PostgREST.

        >>> parse_content_range("0-9/57")
        (0, 9, 57)
        >>> parse_content_range("*/0")
        (None, None, 0)
    """
    if not header:
        return None, None, None
    unit_and_range = header.split(" ")[-1]
    span, _, total = unit_and_range.partition("/")
    start = end = None
    if span and span != "*":
        first, _, last = span.partition("-")
        start, end = int(first), int(last)
    count = int(total) if total and total != "*" else None
    return start, end, count


class RestRecordSource:
    """
    Reads and deletes rows of one backend table through its REST endpoint.

    Paging uses ``Range`` + ``Prefer: count=exact`` and reads the total from
    ``Content-Range``; deletes filter with ``?{key_field}=eq.{key}``.

    Usage:
        source = RestRecordSource("https://db.example.com", "jobs", "job_id",
                                  api_key=config.backend.api_key,
                                  order="created_at.desc")
        page = await source.fetch_page(2, 10)
    """

    def __init__(
        self,
        base_url: str,
        table: str,
        key_field: str,
        api_key: Optional[str] = None,
        order: Optional[str] = None,
        select: str = "*",
        client: Optional[httpx.AsyncClient] = None,
        timeout: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.key_field = key_field
        self._api_key = api_key
        self._order = order
        self._select = select
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout, connect=10.0),
                follow_redirects=True,
            )
        return self._client

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        if extra:
            headers.update(extra)
        return headers

    def _params(self) -> Dict[str, str]:
        params = {"select": self._select}
        if self._order:
            params["order"] = self._order
        return params

    async def _request(
        self,
        operation: str,
        method: str,
        params: Dict[str, str],
        headers: Dict[str, str],
        accept_status: Tuple[int, ...] = (),
    ) -> httpx.Response:
        start_time = time.monotonic()
        try:
            response = await self._get_client().request(
                method, self.url, params=params, headers=headers
            )
        except httpx.HTTPError as e:
            duration_ms = (time.monotonic() - start_time) * 1000
            log(log_record_source_call(self.table, operation, duration_ms, False, error=str(e)))
            raise CareerDeskIntegrationError(
                f"{operation} on '{self.table}' failed: {e}",
                backend_table=self.table,
            ) from e

        duration_ms = (time.monotonic() - start_time) * 1000
        ok = response.is_success or response.status_code in accept_status
        log(log_record_source_call(
            self.table,
            operation,
            duration_ms,
            ok,
            status_code=response.status_code,
            error=None if ok else response.text[:500],
        ))
        if not ok:
            logger.error(
                f"{operation} on '{self.table}' returned {response.status_code}: "
                f"{response.text[:200]}"
            )
            raise CareerDeskIntegrationError(
                f"{operation} on '{self.table}' returned HTTP {response.status_code}",
                backend_table=self.table,
                status_code=response.status_code,
                response_body=response.text,
            )
        return response

    async def fetch_all(self) -> RecordPage:
        response = await self._request("fetch_all", "GET", self._params(), self._headers())
        records = response.json()
        return RecordPage(records=records, total_count=len(records))

    async def fetch_page(self, page: int, page_size: int) -> RecordPage:
        start = max(0, (page - 1) * page_size)
        end = start + page_size - 1
        response = await self._request(
            "fetch_page",
            "GET",
            self._params(),
            self._headers({
                "Range-Unit": "items",
                "Range": f"{start}-{end}",
                "Prefer": "count=exact",
            }),
            # Requested range lies past the last row
            accept_status=(416,),
        )
        _, _, total = parse_content_range(response.headers.get("Content-Range"))
        if response.status_code == 416:
            return RecordPage(records=[], total_count=total or 0)
        records = response.json()
        return RecordPage(
            records=records,
            total_count=total if total is not None else start + len(records),
        )

    async def fetch_one(self, key: Any) -> Dict[str, Any]:
        params = self._params()
        params.pop("order", None)
        params[self.key_field] = f"eq.{key}"
        params["limit"] = "1"
        response = await self._request("fetch_one", "GET", params, self._headers())
        rows = response.json()
        if not rows:
            raise CareerDeskObjectNotFoundError(
                f"No row in '{self.table}' with {self.key_field}={key}",
                record_key=str(key),
            )
        return rows[0]

    async def delete(self, key: Any) -> None:
        await self._request(
            "delete",
            "DELETE",
            {self.key_field: f"eq.{key}"},
            self._headers({"Prefer": "return=minimal"}),
        )
        logger.info(f"Deleted {self.table}.{self.key_field}={key}")

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
