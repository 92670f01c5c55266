"""
Shared HTTP call used by the AirTable and Outline wrappers.

One place for the request policy: bearer auth, bounded timeout,
non-2xx is fatal, no retries.
"""

from typing import Any, Optional

import requests

from airtable_outline_sync.errors import TransportError


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    *,
    token: str,
    timeout: int,
    params: Optional[dict[str, Any]] = None,
    payload: Optional[dict[str, Any]] = None,
) -> requests.Response:
    """
    Send a single authenticated request.

    Args:
        session: Session (or compatible object) used to send the request.
        method: HTTP method.
        url: Absolute URL.
        token: Bearer token for the Authorization header.
        timeout: Seconds to wait before giving up.
        params: Optional query string parameters.
        payload: Optional JSON body.

    Returns:
        The 2xx response.

    Raises:
        TransportError: On a non-2xx status, a timeout, or a connection failure.
    """
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    try:
        response = session.request(
            method=method,
            url=url,
            params=params,
            json=payload,
            headers=headers,
            timeout=timeout,
        )
    except requests.Timeout as e:
        raise TransportError(None, f"timed out after {timeout}s: {method} {url}") from e
    except requests.RequestException as e:
        raise TransportError(None, str(e)) from e

    if not 200 <= response.status_code < 300:
        raise TransportError(response.status_code, response.text)

    return response
