"""
AirTable API wrapper for the sync system.

Provides a clean interface to the AirTable REST API with:
- Rate limiting compliance
- Offset-based pagination
- Typed record decoding
- Error handling
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from ratelimit import limits, sleep_and_retry
from rich.console import Console

from airtable_outline_sync.config import Config
from airtable_outline_sync.errors import SourceAPIError, TransportError
from airtable_outline_sync.field_value import FieldValue
from airtable_outline_sync.transport import send_request

console = Console()

# AirTable API rate limit: 5 requests per second per base
RATE_LIMIT_CALLS = 5
RATE_LIMIT_PERIOD = 1  # second


@dataclass(frozen=True)
class AirtableRecord:
    """Represents one AirTable row with decoded field values."""

    id: str
    fields: dict[str, FieldValue] = field(default_factory=dict)
    created_time: str = ""

    @classmethod
    def from_api_response(cls, record: Any) -> "AirtableRecord":
        """
        Create AirtableRecord from one element of a list response.

        Raises:
            SourceAPIError: If the element is not a record object.
        """
        if not isinstance(record, dict):
            raise SourceAPIError(f"Expected a record object, got {type(record).__name__}")

        record_id = record.get("id")
        if not isinstance(record_id, str) or not record_id:
            raise SourceAPIError("AirTable returned a record without an 'id'")

        raw_fields = record.get("fields", {})
        if not isinstance(raw_fields, dict):
            raise SourceAPIError(f"Record {record_id} has a non-object 'fields' value")

        created_time = record.get("createdTime", "")
        if not isinstance(created_time, str):
            raise SourceAPIError(f"Record {record_id} has a non-string 'createdTime'")

        return cls(
            id=record_id,
            fields={name: FieldValue.decode(value) for name, value in raw_fields.items()},
            created_time=created_time,
        )


@dataclass
class AirtablePage:
    """One page of a list response."""

    records: list[AirtableRecord]
    offset: Optional[str] = None

    @classmethod
    def from_api_response(cls, payload: Any) -> "AirtablePage":
        """Create AirtablePage from a decoded JSON body."""
        if not isinstance(payload, dict):
            raise SourceAPIError("AirTable response is not a JSON object")

        records = payload.get("records")
        if not isinstance(records, list):
            raise SourceAPIError("AirTable response has no 'records' list")

        offset = payload.get("offset")
        if offset is not None and not isinstance(offset, str):
            raise SourceAPIError("AirTable response has a non-string 'offset'")

        return cls(
            records=[AirtableRecord.from_api_response(r) for r in records],
            offset=offset or None,
        )


class AirtableAPI:
    """
    Wrapper around the AirTable list-records endpoint.

    Handles:
    - Authentication
    - Rate limiting (5 req/sec)
    - Pagination via the 'offset' cursor
    - Fail-fast error handling (no retries)
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """
        Initialize the AirTable API client.

        Args:
            config: Configuration instance with AirTable credentials.
            session: Optional HTTP session; a new one is created if omitted.
        """
        self.config = config
        self.session = session or requests.Session()
        self._request_count = 0

    @property
    def table_url(self) -> str:
        return f"{self.config.airtable_base_url}/{self.config.airtable_base_id}/{self.config.airtable_table_name}"

    @sleep_and_retry
    @limits(calls=RATE_LIMIT_CALLS, period=RATE_LIMIT_PERIOD)
    def _rate_limited_call(self, func, *args, **kwargs) -> Any:
        """Execute a rate-limited API call."""
        self._request_count += 1
        return func(*args, **kwargs)

    def fetch_page(self, offset: Optional[str] = None) -> AirtablePage:
        """
        Fetch a single page of records.

        Args:
            offset: Continuation cursor from the previous page, if any.

        Returns:
            AirtablePage with the page's records and next cursor.

        Raises:
            TransportError: On non-2xx status, timeout, or connection failure.
            SourceAPIError: If the body is not a valid records page.
        """
        params: dict[str, Any] = {}
        if offset:
            params["offset"] = offset
        if self.config.airtable_view:
            params["view"] = self.config.airtable_view

        response = self._rate_limited_call(
            send_request,
            self.session,
            "GET",
            self.table_url,
            token=self.config.airtable_api_key,
            timeout=self.config.request_timeout,
            params=params or None,
        )

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceAPIError(f"AirTable returned invalid JSON: {e}") from e

        return AirtablePage.from_api_response(payload)

    def fetch_all(self) -> list[AirtableRecord]:
        """
        Fetch every record of the configured table.

        Pages are requested sequentially, each with the cursor returned by
        the previous one, until a page carries no cursor. Any error aborts
        the whole fetch; no partial result is returned.

        Returns:
            All records, in page order and then within-page order.
        """
        records: list[AirtableRecord] = []
        offset: Optional[str] = None

        while True:
            try:
                page = self.fetch_page(offset)
            except (TransportError, SourceAPIError) as e:
                console.print(f"[red]API Error fetching records from {self.config.airtable_table_name}: {e}[/red]")
                raise

            records.extend(page.records)

            if self.config.debug:
                console.print(f"[dim]Fetched page with {len(page.records)} records[/dim]")

            if not page.offset:
                break
            offset = page.offset

        return records

    @property
    def request_count(self) -> int:
        """Number of API requests made."""
        return self._request_count
