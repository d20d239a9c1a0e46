"""CdnjsClient: search the cdnjs catalog and resolve package URLs."""
import logging
from typing import List, Optional

import requests

from .constants import BASE_URL, CACHE_TTL_HOURS, PACKAGES_URL, REQUEST_TIMEOUT
from .errors import NotFoundError
from .fetch import CatalogCache, CatalogFetcher
from .match import SEARCHES, Package, build_package, extract_term, find_by_name, get_version, toggle_extension


class CdnjsClient:
    """Lookup client owning its own catalog fetcher and cache."""

    def __init__(self, packages_url: str = PACKAGES_URL, base_url: str = BASE_URL,
                 session: Optional[requests.Session] = None, cache: Optional[CatalogCache] = None,
                 ttl_hours: float = CACHE_TTL_HOURS, timeout: float = REQUEST_TIMEOUT,
                 logger: Optional[logging.Logger] = None, fetcher: Optional[CatalogFetcher] = None):
        """
        Initialize the client

        Args:
            packages_url: URL of the catalog JSON
            base_url: Prefix used when building asset URLs
            session: Optional requests Session (a default one is created otherwise)
            cache: Optional CatalogCache to share between clients
            fetcher: Prebuilt fetcher; overrides the network arguments above
        """
        self.base_url = base_url
        self.logger = logger
        self.fetcher = fetcher or CatalogFetcher(
            packages_url=packages_url,
            session=session,
            cache=cache,
            ttl_hours=ttl_hours,
            timeout=timeout,
            logger=logger,
        )

    @classmethod
    def from_config(cls, cfg: dict, logger: Optional[logging.Logger] = None) -> 'CdnjsClient':
        """Build a client from a dict shaped like `config.load_config()` output."""
        return cls(
            packages_url=cfg['urls']['packages'],
            base_url=cfg['urls']['base'],
            ttl_hours=cfg['cache']['ttl_hours'],
            timeout=cfg['network']['timeout'],
            logger=logger,
        )

    def packages(self):
        return self.fetcher.packages()

    def search(self, term: str, field: str = 'name') -> List[Package]:
        """Loosely search the catalog; raises NotFoundError when nothing matches.

        The version part of `term` is ignored.
        """
        if field not in SEARCHES:
            raise ValueError(f"Unknown search field: {field}")
        parsed = extract_term(term)
        packages, _ = self.fetcher.packages()
        results = [build_package(p, base=self.base_url) for p in SEARCHES[field](parsed.name, packages)]
        if not results:
            raise NotFoundError("No matching packages found.")
        if self.logger:
            self.logger.debug(f"search {term!r} by {field}: {len(results)} result(s)")
        return results

    def resolve(self, term: str) -> Package:
        """Return the package whose name is exactly `term` (or with `.js` toggled)."""
        parsed = extract_term(term)
        packages, _ = self.fetcher.packages()
        entry = find_by_name(parsed.name, packages)
        if entry is None:
            entry = find_by_name(toggle_extension(parsed.name), packages)
        if entry is None:
            raise NotFoundError("No such package found.")
        if self.logger:
            self.logger.debug(f"resolve {term!r} -> {entry.name}")
        return get_version(parsed.version, build_package(entry, base=self.base_url))

    # The command verb is `url`
    url = resolve
