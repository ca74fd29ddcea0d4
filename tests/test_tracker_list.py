import requests

from cache.stores import MemoryStore
from tracker.list_provider import (
    VARIANT_URLS,
    TrackerListProvider,
    parse_tracker_list,
    resolve_source_url,
)
from tracker.urls import normalize_tracker, unique

LIST_TEXT = """
# comentário
udp://tracker.one.example:1337/announce

http://tracker.two.example/anunciar
udp://tracker.one.example:1337/announce
magnet:?xt=urn:btih:abc
wss://tracker.webtorrent.example
https://tracker.three.example/anunc
"""


class FakeResponse:
    def __init__(self, text="", status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_unique_keeps_first_occurrence():
    assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_normalize_tracker_fixes_translated_paths():
    assert normalize_tracker("http://t.example/anunciar") == "http://t.example/announce"
    assert normalize_tracker("udp://t.example:80/anunc") == "udp://t.example:80/announce"
    assert normalize_tracker("# udp://t.example") is None
    assert normalize_tracker("ftp://t.example") is None


def test_parse_tracker_list():
    assert parse_tracker_list(LIST_TEXT) == [
        "udp://tracker.one.example:1337/announce",
        "http://tracker.two.example/announce",
        "https://tracker.three.example/announce",
    ]


def test_resolve_source_url():
    assert resolve_source_url("best") == VARIANT_URLS["best"]
    assert resolve_source_url("unknown") == VARIANT_URLS["all"]
    assert resolve_source_url("best", "https://my.example/list.txt") == "https://my.example/list.txt"


def test_list_is_cached_in_store():
    session = FakeSession([FakeResponse(LIST_TEXT)])
    provider = TrackerListProvider(store=MemoryStore(), session=session)

    first = provider.get_trackers(VARIANT_URLS["all"])
    second = provider.get_trackers(VARIANT_URLS["all"])

    assert first == second
    assert len(first) == 3
    assert session.calls == [VARIANT_URLS["all"]]


def test_failed_fetch_falls_back_to_last_good_list():
    store = MemoryStore()
    session = FakeSession([
        FakeResponse(LIST_TEXT),
        requests.exceptions.ConnectionError("Connection refused"),
    ])
    provider = TrackerListProvider(store=store, session=session)
    good = provider.get_trackers(VARIANT_URLS["best"])

    store.clear()
    fallback = provider.get_trackers(VARIANT_URLS["best"])

    assert fallback == good


def test_failed_fetch_without_history_returns_empty():
    session = FakeSession([FakeResponse(status=500)])
    provider = TrackerListProvider(store=MemoryStore(), session=session)

    assert provider.get_trackers("https://lists.example/trackers.txt") == []


class ClosingSession(FakeSession):
    def __init__(self, responses):
        super().__init__(responses)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


def test_own_session_is_closed_after_fetch(monkeypatch):
    created = []

    def make_session():
        session = ClosingSession([FakeResponse(LIST_TEXT)])
        created.append(session)
        return session

    monkeypatch.setattr(requests, "Session", make_session)
    provider = TrackerListProvider(store=MemoryStore())

    trackers = provider.get_trackers("https://lists.example/trackers.txt")

    assert trackers[0] == "udp://tracker.one.example:1337/announce"
    assert len(created) == 1
    assert created[0].closed
