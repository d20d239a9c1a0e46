from datetime import datetime, timedelta

import pytest
import requests

from cdnjs_lib.errors import FetchError
from cdnjs_lib.fetch import CatalogCache, CatalogFetcher
from conftest import FakeSession


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0))


def test_first_call_fetches_and_transforms(fake_session, clock):
    fetcher = CatalogFetcher(session=fake_session, clock=clock)
    packages, from_cache = fetcher.packages()
    assert from_cache is False
    assert [p.name for p in packages][:2] == ['jquery', 'jquery-mobile']
    assert len(fake_session.calls) == 1
    assert fake_session.calls[0]['url'] == 'https://cdnjs.com/packages.json'


def test_second_call_within_ttl_is_cached(fake_session, clock):
    fetcher = CatalogFetcher(session=fake_session, clock=clock)
    first, _ = fetcher.packages()
    clock.advance(hours=23, minutes=59)
    second, from_cache = fetcher.packages()
    assert from_cache is True
    assert second is first
    assert len(fake_session.calls) == 1


def test_call_after_expiry_refetches(fake_session, clock):
    fetcher = CatalogFetcher(session=fake_session, clock=clock)
    fetcher.packages()
    clock.advance(hours=24)
    _, from_cache = fetcher.packages()
    assert from_cache is False
    assert len(fake_session.calls) == 2
    assert fetcher.cache.expires == clock.now + timedelta(hours=24)


def test_custom_ttl(fake_session, clock):
    fetcher = CatalogFetcher(session=fake_session, clock=clock, ttl_hours=1)
    fetcher.packages()
    clock.advance(minutes=61)
    fetcher.packages()
    assert len(fake_session.calls) == 2


def test_transport_error_raises_fetch_error(clock):
    session = FakeSession(exc=requests.exceptions.ConnectionError('boom'))
    fetcher = CatalogFetcher(session=session, clock=clock)
    with pytest.raises(FetchError) as excinfo:
        fetcher.packages()
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)
    assert fetcher.cache.packages is None


@pytest.mark.parametrize("body, status", [
    ({'libraries': []}, 200),
    ({'packages': None}, 200),
    (['not', 'an', 'object'], 200),
    ('<html>oops</html>', 200),
    ({'packages': [{'name': 'x', 'version': '1'}]}, 503),
])
def test_wrong_shape_degrades_to_empty(body, status, clock):
    session = FakeSession(body=body, status_code=status)
    fetcher = CatalogFetcher(session=session, clock=clock)
    assert fetcher.packages() == ([], False)
    # Nothing cached, so the next call asks again
    fetcher.packages()
    assert len(session.calls) == 2


def test_timeout_is_passed_to_session(fake_session, clock):
    fetcher = CatalogFetcher(session=fake_session, clock=clock, timeout=3)
    fetcher.packages()
    assert fake_session.calls[0]['timeout'] == 3


def test_shared_cache_between_fetchers(fake_session, clock):
    cache = CatalogCache()
    CatalogFetcher(session=fake_session, cache=cache, clock=clock).packages()
    other = FakeSession(body={'packages': []})
    _, from_cache = CatalogFetcher(session=other, cache=cache, clock=clock).packages()
    assert from_cache is True
    assert other.calls == []


def test_independent_fetchers_do_not_share_state(fake_session, clock):
    a = CatalogFetcher(session=fake_session, clock=clock)
    b = CatalogFetcher(session=fake_session, clock=clock)
    a.packages()
    b.packages()
    assert len(fake_session.calls) == 2


def test_cache_is_fresh():
    cache = CatalogCache()
    now = datetime(2024, 1, 1)
    assert not cache.is_fresh(now)
    cache.store([], now + timedelta(seconds=1))
    assert cache.is_fresh(now)
    assert not cache.is_fresh(now + timedelta(seconds=1))


def test_default_session_sets_user_agent():
    fetcher = CatalogFetcher()
    assert isinstance(fetcher.session, requests.Session)
    assert 'cdnjs-cli' in fetcher.session.headers['User-Agent']


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_is_rejected(fake_session, timeout):
    with pytest.raises(ValueError):
        CatalogFetcher(session=fake_session, timeout=timeout)
