from telemetry.boosts import BoostsFeed


def _event(i, **extra):
    event = {"mode": "basic", "limit": 5, "healthy": i, "total": 50, "source": "aggregate: YTS",
             "type": "movie", "id": f"tt{i}", "title": f"Movie {i}"}
    event.update(extra)
    return event


def test_recent_is_newest_first_and_capped():
    feed = BoostsFeed(max_items=20)
    for i in range(25):
        feed.push(_event(i))

    items = feed.recent()

    assert len(items) == 20
    assert items[0]["id"] == "tt24"
    assert items[-1]["id"] == "tt5"


def test_push_normalizes_entry():
    feed = BoostsFeed()
    feed.push(_event(3, mode="AGGRESSIVE", season="2", episode=7))

    item = feed.recent()[0]

    assert item["mode"] == "aggressive"
    assert item["season"] == 2
    assert item["episode"] == 7
    assert item["time"].endswith("Z")
    assert isinstance(item["ts"], int)


def test_season_omitted_for_movies():
    feed = BoostsFeed()
    feed.push(_event(1))

    assert "season" not in feed.recent()[0]


def test_listeners_are_notified_and_failures_ignored():
    feed = BoostsFeed()
    received = []

    def broken(event):
        raise RuntimeError("listener bug")

    feed.subscribe(broken)
    unsubscribe = feed.subscribe(received.append)
    feed.push(_event(1))
    unsubscribe()
    feed.push(_event(2))

    assert [e["id"] for e in received] == ["tt1"]
    assert len(feed.recent()) == 2


def test_push_never_raises_on_bad_input():
    feed = BoostsFeed()

    feed.push(None)
    feed.push({"limit": "not-a-number"})

    assert feed.recent()[0]["limit"] == 0
