from urllib.parse import quote

from magnet.codec import (
    append_trackers,
    build_magnet,
    extract_info_hash,
    get_magnet_name,
    normalize_magnet,
)
from magnet.parser import MagnetParser

HEX_HASH = "0123456789ABCDEF0123456789ABCDEF01234567"
T1 = "udp://tracker.one.example:1337/announce"
T2 = "https://tracker.two.example/announce"


def test_normalize_strips_trackers_and_html_ampersands():
    magnet = (
        f"magnet:?xt=urn:btih:{HEX_HASH}&amp;dn=Some.Movie"
        f"&amp;tr={quote(T1, safe='')}&tr={quote(T2, safe='')}"
    )

    assert normalize_magnet(magnet) == f"magnet:?xt=urn:btih:{HEX_HASH.lower()}&dn=Some.Movie"


def test_normalize_ignores_which_trackers_are_attached():
    base = f"magnet:?xt=urn:btih:{HEX_HASH}&dn=Name"
    with_one = append_trackers(base, [T1])
    with_two = append_trackers(base, [T2, T1])

    assert normalize_magnet(with_one) == normalize_magnet(with_two)


def test_normalize_fails_soft_on_malformed_input():
    assert normalize_magnet("https://example.com/file.torrent") == ""
    assert normalize_magnet("") == ""
    assert normalize_magnet(None) == ""


def test_append_trackers_skips_exact_duplicates():
    magnet = f"magnet:?xt=urn:btih:{HEX_HASH}&dn=Name"

    result = append_trackers(magnet, [T1, T1, T2])

    assert MagnetParser.parse(result)["trackers"] == [T1, T2]
    assert result.count("tr=") == 2


def test_append_trackers_preserves_existing_and_order():
    magnet = f"magnet:?xt=urn:btih:{HEX_HASH}&tr={quote(T2, safe='')}"

    result = append_trackers(magnet, [T1, T2])

    assert MagnetParser.parse(result)["trackers"] == [T2, T1]


def test_append_trackers_returns_non_magnet_untouched():
    assert append_trackers("not-a-magnet", [T1]) == "not-a-magnet"


def test_build_magnet_round_trips_info_hash():
    magnet = build_magnet(HEX_HASH.lower(), "Some Movie 2020", [T1, T2, T1])

    assert magnet.startswith(f"magnet:?xt=urn:btih:{HEX_HASH.lower()}")
    assert extract_info_hash(normalize_magnet(magnet)) == HEX_HASH.lower()
    assert get_magnet_name(magnet) == "Some Movie 2020"
    assert MagnetParser.parse(magnet)["trackers"] == [T1, T2]


def test_build_magnet_without_hash_is_empty():
    assert build_magnet("", "Name", [T1]) == ""


def test_extract_info_hash_converts_base32():
    # 20 bytes zerados em base32
    magnet = "magnet:?xt=urn:btih:" + "A" * 32

    assert extract_info_hash(magnet) == "0" * 40
