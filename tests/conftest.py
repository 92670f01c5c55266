"""
Pytest configuration and shared fixtures.

HTTP is faked by handing the API wrappers a session object that replays
queued responses and records every request it receives.
"""

import json as jsonlib
from typing import Any, Optional

import pytest

from airtable_outline_sync.config import Config


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else jsonlib.dumps(body)

    def json(self) -> Any:
        return jsonlib.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; replays responses in order."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def queue(self, response) -> None:
        self.responses.append(response)

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "json": json,
                "headers": headers,
                "timeout": timeout,
            }
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def airtable_page(records, offset=None) -> FakeResponse:
    body = {"records": records}
    if offset is not None:
        body["offset"] = offset
    return FakeResponse(200, body)


def airtable_record(record_id: str, fields: dict, created_time: str = "2024-01-01T00:00:00.000Z") -> dict:
    return {"id": record_id, "fields": fields, "createdTime": created_time}


def outline_ok(document_id: str = "doc-1", title: str = "Team - Airtable Export") -> FakeResponse:
    return FakeResponse(
        200,
        {
            "ok": True,
            "data": {"id": document_id, "title": title, "url": f"/doc/{document_id}"},
        },
    )


@pytest.fixture
def make_config():
    def _make(**overrides) -> Config:
        values = dict(
            airtable_api_key="key-abc",
            airtable_base_id="appBASE",
            airtable_table_name="Team",
            outline_api_token="tok-xyz",
            outline_team_id="team-1",
            airtable_base_url="https://airtable.test/v0",
            outline_base_url="https://outline.test/api",
        )
        values.update(overrides)
        return Config(**values)

    return _make


@pytest.fixture
def config(make_config) -> Config:
    return make_config()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
