"""Shared HTTP helpers used by the catalog client.

Encapsulates request/timeout handling and retries so the catalog fetcher
only deals with status codes and bodies. Responses are never cached: every
resolution reads the catalog fresh.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional, Dict, Tuple

import requests

from constants import Constants
from common.errors import NetworkError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "jdkresolve/1.0",
}


def _backoff_delay(attempt: int) -> float:
    """Exponential backoff delay before retry number ``attempt`` (1-based)."""
    return Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1))


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and retries, with DEBUG traces.

    Only transport failures (timeouts, connection errors) are retried; any
    HTTP response, whatever its status, is returned to the caller.

    Args:
        url: Target URL
        headers: Optional request headers, merged over ``DEFAULT_HEADERS``
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, body_text)

    Raises:
        NetworkError: when every attempt failed at the transport level.
    """
    safe_target = safe_url(url)
    request_headers = dict(DEFAULT_HEADERS)
    if headers:
        request_headers.update(headers)

    attempts = max(1, int(Constants.HTTP_RETRY_MAX))
    last_exception = None

    for attempt in range(1, attempts + 1):
        if attempt > 1:
            time.sleep(_backoff_delay(attempt - 1))
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt
                        )
                    )

                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=request_headers,
                    **kwargs
                )

                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP response",
                        extra=extra_context(
                            event="http_response",
                            component="http_client",
                            action="GET",
                            outcome="success" if response.status_code < 400 else "http_error",
                            status_code=response.status_code,
                            duration_ms=t.duration_ms(),
                            target=safe_target
                        )
                    )
                return response.status_code, dict(response.headers), response.text

            except requests.Timeout:
                last_exception = f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
                outcome = "timeout"
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                outcome = "request_exception"

        logger.debug(
            "HTTP attempt %d/%d failed: %s",
            attempt,
            attempts,
            last_exception,
            extra=extra_context(
                event="http_exception",
                component="http_client",
                action="GET",
                outcome=outcome,
                attempt=attempt,
                target=safe_target
            )
        )

    raise NetworkError(
        f"Request to {safe_target} failed after {attempts} attempts: {last_exception}",
        url=url,
    )
