"""Matching helpers: term parsing, search/find, URL building and version selection."""
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from .constants import BASE_URL
from .transform import CatalogEntry

_ENDS_WITH_JS = re.compile(r'\.js$')


@dataclass
class SearchTerm:
    name: str
    version: Optional[str] = None


@dataclass
class Package:
    """A resolved package with its asset URL and per-version URLs."""
    name: str
    url: str
    versions: Dict[str, str] = field(default_factory=dict)


def extract_term(term: str) -> SearchTerm:
    """Split `name@version` into its parts. Anything after a second `@` is dropped."""
    segments = term.split('@')
    version = segments[1] if len(segments) > 1 else None
    return SearchTerm(name=segments[0], version=version or None)


def toggle_extension(name: str) -> str:
    """`angular.js` -> `angular`, `angular` -> `angular.js`."""
    if _ENDS_WITH_JS.search(name):
        return _ENDS_WITH_JS.sub('', name)
    return name + '.js'


# Search helpers (return a list)

def search_by(accessor: Callable[[CatalogEntry], Optional[str]], term: str, items: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    """Case-insensitive substring search over one field, in catalog order.

    Items whose field is empty never match, not even the empty term.
    """
    needle = term.lower()
    matches = []
    for item in items:
        value = accessor(item)
        if value and needle in str(value).lower():
            matches.append(item)
    return matches


def search_by_name(term: str, items: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    return search_by(lambda e: e.name, term, items)


def search_by_filename(term: str, items: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    return search_by(lambda e: e.filename, term, items)


def search_by_description(term: str, items: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    return search_by(lambda e: e.description, term, items)


SEARCHES = {
    'name': search_by_name,
    'filename': search_by_filename,
    'description': search_by_description,
}


# Find helpers (return the first exact match or None)

def find_by(accessor: Callable[[CatalogEntry], Optional[str]], term: str, items: Iterable[CatalogEntry]) -> Optional[CatalogEntry]:
    for item in items:
        value = accessor(item)
        if value and value == term:
            return item
    return None


def find_by_name(term: str, items: Iterable[CatalogEntry]) -> Optional[CatalogEntry]:
    return find_by(lambda e: e.name, term, items)


def find_by_filename(term: str, items: Iterable[CatalogEntry]) -> Optional[CatalogEntry]:
    return find_by(lambda e: e.filename, term, items)


def find_by_description(term: str, items: Iterable[CatalogEntry]) -> Optional[CatalogEntry]:
    return find_by(lambda e: e.description, term, items)


def build_url(name: str, version: str, filename: Optional[str] = None, base: str = BASE_URL) -> str:
    """Join `base + name/version/filename`. Segments are not escaped."""
    return base + '/'.join([name, version, filename or name])


def build_package(entry: CatalogEntry, base: str = BASE_URL) -> Package:
    """Build a Package with the current-version URL and a URL per known version."""
    minified = entry.files.get('minified')
    return Package(
        name=entry.name,
        url=build_url(entry.root, entry.version, minified, base=base),
        versions={v: build_url(entry.root, v, minified, base=base) for v in entry.versions},
    )


def get_version(version: Optional[str], package: Package) -> Package:
    """Point `package` at `version` in place.

    Left unchanged when no version is asked for, when the URL already contains
    the version string (a plain substring test, so "1.2" matches a "1.2.3" URL),
    or when the version is unknown.
    """
    if not version:
        return package
    if version in package.url:
        return package
    if version not in package.versions:
        return package
    package.url = package.versions[version]
    package.name = f"{package.name}@{version}"
    return package
