"""
Outline API wrapper for the sync system.

Writes the rendered Markdown into a single Outline document, either
creating a new one or updating a configured one.
"""

from dataclasses import dataclass
from typing import Any, Optional

import requests
from rich.console import Console

from airtable_outline_sync.config import Config
from airtable_outline_sync.errors import DestinationAPIError, TransportError
from airtable_outline_sync.transport import send_request

console = Console()

CREATE_ENDPOINT = "documents.create"
UPDATE_ENDPOINT = "documents.update"


@dataclass
class OutlineDocument:
    """The document as reported back by Outline."""

    id: Optional[str]
    title: str
    url: Optional[str] = None
    created: bool = False

    @classmethod
    def from_api_response(cls, data: Any, title: str, created: bool) -> "OutlineDocument":
        """Create OutlineDocument from the 'data' member of a response."""
        if not isinstance(data, dict):
            data = {}

        return cls(
            id=data.get("id"),
            title=data.get("title") or title,
            url=data.get("url"),
            created=created,
        )


class OutlineAPI:
    """
    Wrapper around the Outline documents API.

    The create/update choice is made from configuration alone: no
    existence check is made against the remote side.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """
        Initialize the Outline API client.

        Args:
            config: Configuration instance with Outline credentials.
            session: Optional HTTP session; a new one is created if omitted.
        """
        self.config = config
        self.session = session or requests.Session()

    @property
    def will_create(self) -> bool:
        """Whether upsert() takes the create path."""
        return not self.config.outline_document_id

    def upsert(self, title: str, content: str) -> OutlineDocument:
        """
        Create or update the target document.

        Args:
            title: Document title.
            content: Markdown body.

        Returns:
            OutlineDocument describing the written document.

        Raises:
            TransportError: On non-2xx status, timeout, or connection failure.
            DestinationAPIError: If Outline reports a failure in the body.
        """
        if self.will_create:
            endpoint = CREATE_ENDPOINT
            payload: dict[str, Any] = {
                "title": title,
                "text": content,
                "teamId": self.config.outline_team_id,
                "publish": True,
            }
            if self.config.outline_collection_id:
                payload["collectionId"] = self.config.outline_collection_id
        else:
            endpoint = UPDATE_ENDPOINT
            payload = {
                "id": self.config.outline_document_id,
                "text": content,
                "title": title,
            }

        try:
            data = self._post(endpoint, payload)
        except (TransportError, DestinationAPIError) as e:
            console.print(f"[red]API Error calling {endpoint}: {e}[/red]")
            raise

        return OutlineDocument.from_api_response(data, title=title, created=self.will_create)

    def _post(self, endpoint: str, payload: dict[str, Any]) -> Any:
        """POST to an Outline RPC endpoint and unwrap the response envelope."""
        response = send_request(
            self.session,
            "POST",
            f"{self.config.outline_base_url}/{endpoint}",
            token=self.config.outline_api_token,
            timeout=self.config.request_timeout,
            payload=payload,
        )

        try:
            body = response.json()
        except ValueError as e:
            raise DestinationAPIError(f"Outline returned invalid JSON from {endpoint}") from e

        if isinstance(body, dict) and body.get("ok") is False:
            raise DestinationAPIError(
                body.get("message") or "request was not successful",
                error=body.get("error"),
            )

        if isinstance(body, dict):
            return body.get("data")
        return None
