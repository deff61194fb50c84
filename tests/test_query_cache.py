from unittest.mock import MagicMock

import pytest

from event_manager.exceptions import ApiError, NotFoundError
from event_manager.query_cache import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def cache(clock, sleep):
    return QueryCache(stale_time=30, clock=clock, sleep=sleep)


def test_fetch_stores_result(cache):
    fn = MagicMock(return_value=["event"])

    assert cache.fetch(("events",), fn) == ["event"]
    assert cache.fetch(("events",), fn) == ["event"]
    fn.assert_called_once()


def test_entries_expire_after_stale_time(cache, clock):
    fn = MagicMock(side_effect=["first", "second"])

    cache.fetch(("events",), fn)
    clock.now += 10
    assert cache.fetch(("events",), fn) == "first"

    clock.now += 25
    assert cache.fetch(("events",), fn) == "second"


def test_expired_entries_are_evicted_on_insert(cache, clock):
    for page in range(1000):
        cache.fetch(("events", ("page", str(page))), MagicMock(return_value=page))
    assert len(cache) == 1000

    clock.now += 10_000
    for page in range(10):
        cache.fetch(("events", ("search", str(page))), MagicMock(return_value=page))

    assert len(cache) == 10


def test_fresh_entries_survive_eviction(cache, clock):
    cache.set(("venues",), "venues")
    clock.now += 20
    cache.set(("organizers",), "organizers")
    clock.now += 15
    cache.set(("events",), "events")

    assert len(cache) == 2
    assert cache.get(("organizers",)) == (True, "organizers")
    assert cache.get(("venues",)) == (False, None)


def test_zero_stale_time_disables_storage(clock):
    cache = QueryCache(stale_time=0, clock=clock)
    fn = MagicMock(return_value="value")

    cache.fetch(("events",), fn)
    cache.fetch(("events",), fn)

    assert fn.call_count == 2


def test_retry_until_success(cache, sleep):
    fn = MagicMock(side_effect=[ApiError("down", 503), ApiError("down", 503), "ok"])

    assert cache.fetch(("events",), fn, retry=3, retry_delay=1.0) == "ok"
    assert fn.call_count == 3
    assert sleep.call_count == 2
    sleep.assert_called_with(1.0)


def test_retry_exhausted_raises_last_error(cache, sleep):
    fn = MagicMock(side_effect=ApiError("down", 503))

    with pytest.raises(ApiError, match="down"):
        cache.fetch(("events",), fn, retry=3, retry_delay=0.5)

    assert fn.call_count == 4
    assert sleep.call_count == 3
    assert cache.get(("events",)) == (False, None)


def test_without_retry_fails_immediately(cache, sleep):
    fn = MagicMock(side_effect=ApiError("down", 500))

    with pytest.raises(ApiError):
        cache.fetch(("event", "1"), fn)

    fn.assert_called_once()
    sleep.assert_not_called()


def test_not_found_is_never_retried(cache, sleep):
    fn = MagicMock(side_effect=NotFoundError("Event not found", 404))

    with pytest.raises(NotFoundError):
        cache.fetch(("event", "1"), fn, retry=3)

    fn.assert_called_once()
    sleep.assert_not_called()


def test_other_exceptions_are_not_retried(cache):
    fn = MagicMock(side_effect=KeyError("bug"))

    with pytest.raises(KeyError):
        cache.fetch(("events",), fn, retry=3)

    fn.assert_called_once()


def test_invalidate_by_prefix(cache):
    cache.set(("events", ("page", "1")), "page 1")
    cache.set(("events", ("page", "2")), "page 2")
    cache.set(("event", "7"), "event 7")
    cache.set(("venues",), "venues")

    assert cache.invalidate(("events",)) == 2

    assert cache.get(("events", ("page", "1"))) == (False, None)
    assert cache.get(("event", "7")) == (True, "event 7")
    assert cache.get(("venues",)) == (True, "venues")


def test_invalidate_exact_key(cache):
    cache.set(("event", "7"), "event 7")
    cache.set(("event", "8"), "event 8")

    assert cache.invalidate(("event", "7")) == 1
    assert cache.get(("event", "8")) == (True, "event 8")


def test_clear(cache):
    cache.set(("venues",), "venues")
    cache.clear()
    assert cache.get(("venues",)) == (False, None)


def test_from_config(test_config):
    assert QueryCache.from_config(test_config).stale_time == 60
