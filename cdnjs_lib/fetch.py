"""Network fetch helpers for the cdnjs catalog.

The catalog is held in memory only. A module that keeps a `CatalogFetcher`
around (an API, a long-running script) refetches once the cached copy is
older than the TTL; the command line tool fetches once per run.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

import requests

from .constants import CACHE_TTL_HOURS, PACKAGES_URL, REQUEST_TIMEOUT, USER_AGENT
from .errors import FetchError
from .transform import CatalogEntry, transform


class CatalogCache:
    """Single-slot cache of the transformed catalog."""

    def __init__(self):
        self.packages = None  # type: Optional[List[CatalogEntry]]
        self.expires = None  # type: Optional[datetime]

    def is_fresh(self, now: datetime) -> bool:
        return self.packages is not None and self.expires is not None and now < self.expires

    def store(self, packages: List[CatalogEntry], expires: datetime):
        # Replace, never append
        self.packages = packages
        self.expires = expires


class CatalogFetcher:
    """Download the cdnjs package list, serving it from cache while fresh."""

    def __init__(self, packages_url: str = PACKAGES_URL, session: Optional[requests.Session] = None,
                 cache: Optional[CatalogCache] = None, ttl_hours: float = CACHE_TTL_HOURS,
                 timeout: float = REQUEST_TIMEOUT, clock: Callable[[], datetime] = datetime.now,
                 logger: Optional[logging.Logger] = None):
        self.packages_url = packages_url
        if session is None:
            session = requests.Session()
            session.headers.update({
                'User-Agent': USER_AGENT,
                'Accept': 'application/json',
            })
        self.session = session
        self.cache = cache if cache is not None else CatalogCache()
        self.ttl = timedelta(hours=ttl_hours)
        if not timeout > 0:
            raise ValueError(f"timeout must be greater than 0, got {timeout!r}")
        self.timeout = timeout
        self.clock = clock
        self.logger = logger

    def packages(self) -> Tuple[List[CatalogEntry], bool]:
        """Return `(packages, from_cache)`.

        Raises FetchError when the endpoint cannot be reached. A response without
        a `packages` list yields an empty result and is not cached.
        """
        now = self.clock()
        if self.cache.is_fresh(now):
            if self.logger:
                self.logger.debug(f"Catalog served from cache (expires {self.cache.expires.isoformat()})")
            return self.cache.packages, True

        if self.logger:
            self.logger.info(f"Fetching catalog from {self.packages_url}")
        try:
            response = self.session.get(self.packages_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            if self.logger:
                self.logger.warning(f"Catalog fetch failed: {e}")
            raise FetchError(f"Could not fetch package list: {e}") from e

        raw = self._raw_packages(response)
        if raw is None:
            return [], False

        data = transform(raw)
        self.cache.store(data, self.clock() + self.ttl)
        if self.logger:
            self.logger.info(f"Cached {len(data)} packages until {self.cache.expires.isoformat()}")
        return data, False

    def _raw_packages(self, response) -> Optional[list]:
        """Pull the raw `packages` list out of a response, or None when it has the wrong shape."""
        status = getattr(response, 'status_code', 200)
        if status >= 400:
            if self.logger:
                self.logger.warning(f"Catalog endpoint returned HTTP {status}; treating as empty")
            return None
        try:
            body = response.json()
        except ValueError:
            if self.logger:
                self.logger.warning("Catalog response is not JSON; treating as empty")
            return None
        if not isinstance(body, dict) or not isinstance(body.get('packages'), list):
            if self.logger:
                self.logger.warning("Catalog response has no packages; treating as empty")
            return None
        return body['packages']
