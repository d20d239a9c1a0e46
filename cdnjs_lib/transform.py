"""Normalization of raw cdnjs catalog entries."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class CatalogEntry:
    """A catalog package in the shape the matcher expects."""
    name: str
    root: str
    version: str
    filename: Optional[str] = None
    description: Optional[str] = None
    versions: List[str] = field(default_factory=list)
    files: Dict[str, str] = field(default_factory=dict)


def _collect_versions(raw: Dict, current: str) -> List[str]:
    """Return the version list of a raw entry, current version included, without duplicates."""
    versions = raw.get('versions')
    if not isinstance(versions, list):
        # Older catalog dumps only list versions inside `assets`
        versions = [a.get('version') for a in raw.get('assets') or [] if isinstance(a, dict)]

    seen = []
    for v in versions:
        if v and str(v) not in seen:
            seen.append(str(v))
    if current and current not in seen:
        seen.insert(0, current)
    return seen


def transform_entry(raw: Dict) -> Optional[CatalogEntry]:
    """Normalize one raw entry; returns None when it has no usable name."""
    if not isinstance(raw, dict):
        return None
    name = raw.get('name')
    if not name:
        return None
    name = str(name)

    version = str(raw.get('version') or '')
    filename = raw.get('filename') or None

    files = {}
    if isinstance(raw.get('files'), dict):
        files.update({k: str(v) for k, v in raw['files'].items() if v})
    if filename and 'minified' not in files:
        files['minified'] = filename

    return CatalogEntry(
        name=name,
        root=str(raw.get('root') or name),
        version=version,
        filename=filename,
        description=raw.get('description') or None,
        versions=_collect_versions(raw, version),
        files=files,
    )


def transform(raw_packages: List[Dict]) -> List[CatalogEntry]:
    """Normalize the raw `packages` list, keeping catalog order."""
    entries = []
    for raw in raw_packages:
        entry = transform_entry(raw)
        if entry is not None:
            entries.append(entry)
    return entries
