import pytest

from uptimewatch.storage import (
    LatestStatus,
    StatusHistoryEntry,
    StatusStore,
    StorageError,
)

URL = "https://example.com"


@pytest.fixture
def store(tmp_path):
    with StatusStore(tmp_path / "uptime.db") as opened:
        yield opened


def test_latest_status_round_trip(store):
    store.record_status(URL, 1, 200, 0.25, timestamp=1000)
    assert store.latest_status(URL) == LatestStatus(
        is_up=1, code=200, response_time=0.25, timestamp=1000
    )


def test_latest_status_picks_newest(store):
    store.record_status(URL, 1, 200, 0.1, timestamp=1000)
    store.record_status(URL, 0, 503, 0.2, timestamp=2000)
    store.record_status(URL, 1, 204, 0.3, timestamp=1500)
    latest = store.latest_status(URL)
    assert latest.timestamp == 2000
    assert latest.is_up == 0
    assert latest.code == 503


def test_unknown_url_has_no_status(store):
    store.record_status(URL, 1, 200, 0.1, timestamp=1000)
    assert store.latest_status("https://example.org") is None
    assert store.last_check_time("https://example.org") is None


def test_last_check_time(store):
    store.record_status(URL, 0, -1, 0.0, timestamp=42)
    store.record_status(URL, 1, 200, 0.5, timestamp=77)
    assert store.last_check_time(URL) == 77


def test_record_without_timestamp_uses_now(store):
    import time

    before = int(time.time())
    store.record_status(URL, 1, 200, 0.1)
    after = int(time.time())
    assert before <= store.last_check_time(URL) <= after


def test_recent_history_is_oldest_first_and_limited(store):
    for ts in range(1, 31):
        store.record_status(URL, ts % 2, 200, 0.1, timestamp=ts)
    history = store.recent_history(URL, 24)
    assert len(history) == 24
    assert [entry.timestamp for entry in history] == list(range(7, 31))
    assert history[-1] == StatusHistoryEntry(timestamp=30, is_up=0)


def test_recent_history_only_for_given_url(store):
    store.record_status(URL, 1, 200, 0.1, timestamp=10)
    store.record_status("https://example.org", 0, 500, 0.1, timestamp=20)
    assert store.recent_history(URL, 5) == [StatusHistoryEntry(timestamp=10, is_up=1)]
    assert store.recent_history("https://example.net", 5) == []


def test_recent_history_rejects_non_positive_limit(store):
    with pytest.raises(ValueError):
        store.recent_history(URL, 0)


def test_closed_store_raises(tmp_path):
    store = StatusStore(tmp_path / "uptime.db")
    store.close()
    with pytest.raises(StorageError):
        store.record_status(URL, 1, 200, 0.1, timestamp=1)
    with pytest.raises(StorageError):
        store.latest_status(URL)


def test_data_persists_across_reopen(tmp_path):
    path = tmp_path / "uptime.db"
    with StatusStore(path) as first:
        first.record_status(URL, 1, 301, 1.5, timestamp=500)
    with StatusStore(path) as second:
        assert second.latest_status(URL) == LatestStatus(
            is_up=1, code=301, response_time=1.5, timestamp=500
        )