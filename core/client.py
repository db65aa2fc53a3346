# =============================================================================
# core/client.py  -  HTTP Fetch Wrapper & Error Taxonomy
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Provides api_call(), the one place that talks to the ClawdsBet REST API,
#   and the exceptions every failure is mapped onto:
#
#     ClawdsBetError
#       ├── ConfigurationError  - a required setting (the API key) is missing
#       ├── ApiError            - upstream answered with a non-2xx status
#       └── NetworkError        - transport failure or an unreadable body
#
#   The tools/ layer turns any of these into an error envelope.  Nothing here
#   retries: one call, one request.
#
# REQUEST SHAPE:
#   - URL = settings.api_url + endpoint (+ "?" + urlencoded params)
#   - "Content-Type: application/json" on every request
#   - "X-API-Key: <key>" on every request when a key is configured
#   - Optional JSON body (used by POST /bets)
# =============================================================================

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from core.config import Settings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


class ClawdsBetError(Exception):
    """Base class for every failure surfaced to a tool caller."""


class ConfigurationError(ClawdsBetError):
    """A setting required for the operation is missing."""


class ApiError(ClawdsBetError):
    """The upstream API answered with a non-success status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"API error ({status}): {body}")


class NetworkError(ClawdsBetError):
    """The request never produced a usable response."""


def path_segment(value: Any) -> str:
    """Percent-encode an identifier so it stays a single path segment."""
    return quote(str(value), safe="")


def build_url(settings: Settings, endpoint: str, params: dict[str, Any] | None = None) -> str:
    url = f"{settings.api_url}{endpoint}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def api_call(
    settings: Settings,
    endpoint: str,
    *,
    method: str = "GET",
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> Any:
    """Issue one request against the upstream API and return parsed JSON.

    Args:
        settings: Resolved runtime settings (base URL, key, timeout).
        endpoint: Path below the base URL, starting with "/".
        method: HTTP method.
        params: Query parameters; callers drop absent optionals beforehand.
        body: JSON-serializable request body.

    Returns:
        The decoded JSON payload, unmodified.

    Raises:
        ApiError: for any non-2xx status (message carries status and body).
        NetworkError: for transport failures or a non-JSON response.
    """
    url = build_url(settings, endpoint, params)
    headers = {"Content-Type": "application/json"}
    if settings.has_api_key:
        headers[API_KEY_HEADER] = settings.api_key

    data = json.dumps(body).encode("utf-8") if body is not None else None
    request = Request(url, data=data, headers=headers, method=method)
    logger.debug(f"{method} {url}")

    try:
        with urlopen(request, timeout=settings.timeout) as response:
            raw = response.read()
    except HTTPError as e:
        error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
        raise ApiError(e.code, error_body) from e
    except URLError as e:
        raise NetworkError(f"Network error: {e.reason}") from e
    except OSError as e:
        # Socket timeouts and resets that urllib does not wrap.
        raise NetworkError(f"Network error: {e}") from e

    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise NetworkError(f"Invalid JSON from {url}: {e}") from e
