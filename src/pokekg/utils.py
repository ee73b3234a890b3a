import logging
import time

import requests

from . import config
from .errors import RequestTimeout, UpstreamError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = {429, 500, 502, 503, 504}


def clean_text(text):
    """Trim surrounding whitespace, including non-breaking spaces; None stays None."""
    if text is None:
        return None
    return text.strip()


def is_success(status_code):
    return 200 <= status_code < 300


def http_get(url, params=None, *, headers=None, timeout=None, max_retries=None):
    """Wrapper around requests.get that raises UpstreamError instead of returning None.

    429, 5xx and transport failures are retried with exponential backoff; any
    other non-2xx status fails immediately.
    """
    merged_headers = dict(config.HEADERS)
    merged_headers.update(headers or {})
    timeout = config.API_TIMEOUT if timeout is None else timeout
    max_retries = max(0, config.HTTP_MAX_RETRIES if max_retries is None else max_retries)

    last_error = None
    for attempt in range(max_retries + 1):
        if attempt:
            sleep_for = config.HTTP_BACKOFF_SECONDS * 2 ** (attempt - 1)
            logger.info("[!] Retrying %s in %.1fs (attempt %s/%s)", url, sleep_for, attempt + 1, max_retries + 1)
            time.sleep(sleep_for)
        try:
            response = requests.get(url, params=params, headers=merged_headers, timeout=timeout)
        except requests.Timeout as exc:
            last_error = RequestTimeout(f"Timed out after {timeout}s: {url}", url=url)
            last_error.__cause__ = exc
            continue
        except requests.RequestException as exc:
            last_error = UpstreamError(f"Request failed for {url}: {exc}", url=url)
            last_error.__cause__ = exc
            continue

        if is_success(response.status_code):
            return response
        last_error = UpstreamError(
            f"HTTP {response.status_code} for {url}",
            url=url,
            status=response.status_code,
            details={"reason": response.reason},
        )
        if response.status_code not in RETRYABLE_STATUSES:
            break
    raise last_error
