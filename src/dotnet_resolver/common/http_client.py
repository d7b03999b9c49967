"""Shared HTTP helpers used by the registry clients.

Encapsulates request/timeout error handling so modules avoid duplicating
try/except blocks. Calls are blocking, uncached and never retried: a failure
is raised as ``FetchError`` and the caller decides what to do.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..constants import Constants
from ..errors import FetchError
from .logging_utils import Timer, extra_context, is_debug_enabled, safe_url

logger = logging.getLogger(__name__)


def safe_get(
    url: str,
    *,
    context: str,
    timeout: Optional[int] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable description used in error messages
            (e.g., "index of releases").
        timeout: Request timeout in seconds; defaults to Constants.REQUEST_TIMEOUT.
        headers: Optional request headers.

    Returns:
        requests.Response: A response with a 2xx status.

    Raises:
        FetchError: On timeouts, connection errors and non-2xx responses.
    """
    safe_target = safe_url(url)
    timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = requests.get(url, timeout=timeout, headers=headers)
            res.raise_for_status()
        except requests.Timeout as exc:
            raise FetchError(
                f"Failed to retrieve {context}: request timed out after {timeout} seconds"
            ) from exc
        except requests.HTTPError as exc:
            raise FetchError(
                f"Failed to retrieve {context}: HTTP {exc.response.status_code} from {safe_target}"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            raise FetchError(f"Failed to retrieve {context}: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return res


def get_json(
    url: str,
    *,
    context: str,
    timeout: Optional[int] = None,
) -> Any:
    """Perform GET request and parse the JSON body.

    Raises:
        FetchError: When the request fails or the body is not valid JSON.
    """
    res = safe_get(url, context=context, timeout=timeout, headers={"Accept": "application/json"})
    try:
        return json.loads(res.text)
    except json.JSONDecodeError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    target=safe_url(url),
                ),
            )
        raise FetchError(f"Failed to retrieve {context}: response is not valid JSON") from exc


def get_text(url: str, *, context: str, timeout: Optional[int] = None) -> str:
    """Perform GET request and return the body as text."""
    return safe_get(url, context=context, timeout=timeout).text
