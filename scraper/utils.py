# scraper/utils.py
import logging
import re
import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .errors import UnsuccessfulResponseError

logger = logging.getLogger("scraper.fetcher")

_EXTENSION = re.compile(r"[a-z0-9]+$", re.IGNORECASE)


def is_transient(exc):
    """Transport failures and 5xx responses are worth another attempt."""
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, UnsuccessfulResponseError) and exc.status_code >= 500


def network_retry(url, attempts=3, backoff=1.0):
    """
    Create a tenacity retrying iterator for a single network exchange.

    Args:
        url (str): Requested URL, only used in log messages
        attempts (int): Maximum number of attempts, the first one included.
        backoff (float): Multiplier of the exponential wait between attempts,
            capped at 10 seconds. Zero disables waiting.

    Returns:
        tenacity.AsyncRetrying: Use as ``async for attempt in network_retry(url):``

    Retry Behavior:
        - Only transient failures (see is_transient) are retried
        - The last exception is re-raised once attempts run out
        - A warning is logged before every sleep
    """

    def log_attempt(retry_state):
        exc = retry_state.outcome.exception()
        logger.warning(
            f"Fetch error {url}: {exc!r} attempt {retry_state.attempt_number}"
        )

    return AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=backoff, max=10),
        retry=retry_if_exception(is_transient),
        before_sleep=log_attempt,
        reraise=True,
    )


def file_extension(url):
    """Trailing alphanumeric run of a URL, or None if it ends otherwise."""
    match = _EXTENSION.search(url)
    return match.group(0) if match else None


def get_duration(start, end):
    """Split an elapsed time in seconds into hours, minutes and seconds."""
    diff = end - start
    return {
        "hours": int(diff // 3600 % 24),
        "minutes": int(diff // 60 % 60),
        "seconds": int(diff % 60),
    }


def format_duration(start, end):
    d = get_duration(start, end)
    return f"{d['hours']} hr(s) {d['minutes']} min(s) and {d['seconds']} sec(s)"
