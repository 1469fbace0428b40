"""
Disk-backed image cache for recipe photos.

This module provides a simple cache for image bytes keyed by a hash of the
source URL, so repeat lookups are served from disk without any network call.

The cache has no expiry, no size bound and no eviction: entries persist until
clear_cache() is called. Reads and writes are not locked; two concurrent
lookups for the same unseen URL both fetch and both write the same file.
"""

import hashlib
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Optional, Union

import requests

from cuisine.connectors.base import InvalidData, InvalidResponse, http_get, is_success_status, validate_url

logger = logging.getLogger(__name__)

# Directory name used under the user cache directory when none is configured
CACHE_DIRECTORY_NAME = "RecipeImageCache"

DEFAULT_TIMEOUT_SECONDS = 10.0


def default_cache_directory() -> Path:
    """
    Get the image cache directory from IMAGE_CACHE_DIR or use ~/.cache/RecipeImageCache.
    """
    configured = os.getenv("IMAGE_CACHE_DIR")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / CACHE_DIRECTORY_NAME


def cache_key(url: str) -> str:
    """
    Create a deterministic cache file name for a URL.

    Args:
        url: Source URL string. Surrounding whitespace is ignored, matching
            validate_url().

    Returns:
        SHA-256 hex digest of the stripped URL
    """
    return hashlib.sha256(url.strip().encode("utf-8")).hexdigest()


class ImageCacheService:
    """
    Load images through a local disk cache.

    Attributes:
        cache_directory: Directory holding one file per cached URL
        session: requests.Session used on cache misses
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        cache_directory: Optional[Union[str, Path]] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.cache_directory = Path(cache_directory) if cache_directory else default_cache_directory()
        self.session = session or requests.Session()
        self.timeout = timeout or DEFAULT_TIMEOUT_SECONDS

        try:
            self.cache_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Could not create image cache directory %s: %s", self.cache_directory, e)

    def cache_path(self, url: str) -> Path:
        """Path of the cache file for a URL."""
        return self.cache_directory / cache_key(url)

    def is_cached(self, url: str) -> bool:
        return self.cache_path(url).is_file()

    def _read_cached(self, url: str) -> Optional[bytes]:
        path = self.cache_path(url)
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            # Unreadable entry - treat as a miss and refetch
            logger.debug("Could not read cached image %s: %s", path, e)
            return None

    def _write_cached(self, url: str, data: bytes) -> None:
        # Write beside the entry and rename, so readers never see a partial file
        path = self.cache_path(url)
        tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as e:
            logger.debug("Could not write cached image %s: %s", path, e)
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.debug("Could not remove temporary file %s: %s", tmp_path, cleanup_error)

    def load_image(self, url: str) -> bytes:
        """
        Return image bytes for a URL, from disk if cached, otherwise from the network.

        On a cache miss the image is downloaded and written to disk. The write is
        best-effort: if it fails the bytes are still returned.

        Args:
            url: Absolute http(s) URL of the image

        Returns:
            Raw image bytes

        Raises:
            InvalidURL: If the URL is malformed
            InvalidResponse: If no response was received or the status is not 2xx
            InvalidData: If the response body is empty
        """
        url = validate_url(url)

        cached = self._read_cached(url)
        if cached:
            logger.debug("Image cache hit for %s", url)
            return cached

        logger.debug("Image cache miss for %s", url)
        response = http_get(self.session, url, self.timeout)

        status_code = getattr(response, "status_code", None)
        if not is_success_status(status_code):
            logger.warning("Image request to %s returned status %s", url, status_code)
            raise InvalidResponse(f"Image request to {url} returned status {status_code}")

        data = response.content
        if not data:
            raise InvalidData(f"Empty image body from {url}")

        self._write_cached(url, data)
        return data

    def clear_cache(self) -> None:
        """
        Delete the cache directory and recreate it empty.

        Every entry is discarded, including files that were not written by this cache.
        """
        shutil.rmtree(self.cache_directory, ignore_errors=True)
        try:
            self.cache_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Could not recreate image cache directory %s: %s", self.cache_directory, e)
        logger.info("Cleared image cache at %s", self.cache_directory)

    def get_cache_size(self) -> int:
        """Get the current number of cached entries (useful for monitoring)."""
        if not self.cache_directory.is_dir():
            return 0
        return sum(1 for entry in self.cache_directory.iterdir() if entry.is_file())
