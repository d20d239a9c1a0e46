"""Shared library for the cdnjs lookup tool.

This package contains the pieces used by the command-line script:
- fetch.py: Catalog download and in-memory cache
- transform.py: Normalization of raw catalog entries
- match.py: Search/find helpers, URL building and version selection
- client.py: CdnjsClient combining the above
"""

__version__ = "0.2.0"

from .client import CdnjsClient
from .errors import CdnjsError, FetchError, NotFoundError

__all__ = ["CdnjsClient", "CdnjsError", "FetchError", "NotFoundError", "__version__"]
