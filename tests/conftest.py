"""Pytest configuration for cdnjs tests."""
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add cli directory to path so tests can import the CLI module
cli_dir = Path(__file__).parent.parent / 'cli'
if str(cli_dir) not in sys.path:
    sys.path.insert(0, str(cli_dir))

RAW_PACKAGES = [
    {
        'name': 'jquery',
        'filename': 'jquery.min.js',
        'version': '1.9.1',
        'description': 'JavaScript library for DOM operations',
        'versions': ['1.9.1', '1.9.0', '1.8.0', '1.7.2'],
    },
    {
        'name': 'jquery-mobile',
        'filename': 'jquery.mobile.min.js',
        'version': '1.3.0',
        'description': 'Touch-optimized web framework',
        'versions': ['1.3.0', '1.2.0'],
    },
    {
        'name': 'angular.js',
        'filename': 'angular.min.js',
        'version': '1.1.1',
        'description': 'HTML enhanced for web apps',
        'versions': ['1.0.0', '1.1.1'],
    },
    {
        'name': 'underscore.js',
        'filename': 'underscore-min.js',
        'version': '1.4.4',
        'description': 'Functional programming helpers',
        'assets': [{'version': '1.4.4'}, {'version': '1.4.3'}],
    },
    {
        'name': 'backbone',
        'filename': 'backbone-min.js',
        'version': '0.9.10',
        'description': 'Models and views for JavaScript apps, works with jQuery',
        'versions': ['0.9.10', '0.9.2'],
    },
]


class FakeSession:
    """Stand-in for requests.Session that records each GET."""

    def __init__(self, body=None, status_code=200, exc=None):
        self.body = body
        self.status_code = status_code
        self.exc = exc
        self.calls = []
        self.headers = {}

    def get(self, url, timeout=None, **kwargs):
        self.calls.append({'url': url, 'timeout': timeout})
        if self.exc is not None:
            raise self.exc

        def _json():
            if isinstance(self.body, (dict, list)):
                return self.body
            raise ValueError('No JSON object could be decoded')

        return SimpleNamespace(status_code=self.status_code, json=_json)


@pytest.fixture
def raw_packages():
    return [dict(p) for p in RAW_PACKAGES]


@pytest.fixture
def fake_session(raw_packages):
    return FakeSession(body={'packages': raw_packages})
