"""
Base connector class and network errors for remote recipe data.

This module defines the abstract base class for connectors that pull data from
the recipe feed, plus the error hierarchy shared by the fetcher and the image
cache. Connectors own an HTTP session so tests (and callers) can inject one.

All connectors must:
- Validate the URL before issuing a request
- Issue exactly one request per call (no retry, no backoff)
- Translate transport, status and decoding failures into NetworkError subclasses
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import urlparse

import requests

from cuisine.models import Recipe

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Base class for every failure surfaced by the fetch and cache layers."""
    pass


class InvalidURL(NetworkError):
    """Raised when a URL string cannot be used for a request."""

    def __init__(self, url: Optional[str] = None) -> None:
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")


class InvalidResponse(NetworkError):
    """
    Raised when the server did not answer with a usable HTTP response.

    This covers missing responses (connection failures, timeouts) and
    non-2xx status codes.
    """
    pass


class ServerError(InvalidResponse):
    """Raised for a non-2xx status code; carries the code."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Server error: {status_code}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServerError):
            return NotImplemented
        return self.status_code == other.status_code

    def __hash__(self) -> int:
        return hash((ServerError, self.status_code))


class InvalidData(NetworkError):
    """Raised when the response body is empty or unusable."""
    pass


class DecodingError(NetworkError):
    """Raised when the response body is not valid JSON of the expected shape."""
    pass


def validate_url(url: Optional[str]) -> str:
    """
    Check that a URL is an absolute http(s) URL.

    Args:
        url: URL string to check

    Returns:
        The URL, stripped of surrounding whitespace

    Raises:
        InvalidURL: If the URL is empty, relative, or uses another scheme
    """
    candidate = (url or "").strip()
    try:
        parsed = urlparse(candidate)
    except ValueError as e:
        # e.g. "Invalid IPv6 URL" for an unbalanced bracket
        raise InvalidURL(url) from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidURL(url)
    return candidate


def is_success_status(status_code: Optional[int]) -> bool:
    """Return True for 2xx status codes."""
    return status_code is not None and 200 <= status_code <= 299


def http_get(session: requests.Session, url: Optional[str], timeout: float) -> requests.Response:
    """
    Issue a single GET request through the given session.

    Args:
        session: Session used to send the request
        url: Absolute http(s) URL
        timeout: Request timeout in seconds

    Returns:
        The response, whatever its status code

    Raises:
        InvalidURL: If the URL is malformed
        InvalidResponse: If no response was received (connection error, timeout, ...)
    """
    url = validate_url(url)
    try:
        return session.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.warning("Request to %s failed: %s", url, e)
        raise InvalidResponse(f"No response from {url}: {e}") from e


class BaseConnector(ABC):
    """
    Abstract base class for recipe feed connectors.

    Attributes:
        session: requests.Session used for every request
        timeout: Request timeout in seconds
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, url: str) -> requests.Response:
        """Issue a single GET request with this connector's session and timeout."""
        return http_get(self.session, url, self.timeout)

    @abstractmethod
    def fetch_recipes(self) -> List[Recipe]:
        """
        Fetch and decode the recipe list.

        Returns:
            List of Recipe objects in feed order
        """
        pass
