from core.processors.stream_processor import (
    ScoredStream,
    SortConfig,
    audio_score,
    codec_score,
    compute_scores,
    dedupe_candidates,
    hdr_score,
    resolution_score,
    sort_streams,
    source_score,
)
from models.release import ReleaseInfo
from models.stream import AggregatedStream, StreamCandidate
from utils.parsing.release_info import parse_release_info

from conftest import HASH_A, HASH_B


def _scored(title, **scores):
    stream = AggregatedStream(name="DFStreams", title=title, description="")
    return ScoredStream(stream=stream, scores=scores)


def test_same_info_hash_in_different_case_is_deduplicated():
    candidates = [
        StreamCandidate(provider="A", title="first", info_hash=HASH_A.upper()),
        StreamCandidate(provider="B", title="second", info_hash=HASH_A),
    ]

    result = dedupe_candidates(candidates)

    assert [c.title for c in result] == ["first"]


def test_magnet_hash_dedupes_against_info_hash():
    candidates = [
        StreamCandidate(provider="A", title="hash", info_hash=HASH_B),
        StreamCandidate(provider="B", title="magnet", url=f"magnet:?xt=urn:btih:{HASH_B.upper()}&tr=udp%3A%2F%2Fx"),
    ]

    assert [c.title for c in dedupe_candidates(candidates)] == ["hash"]


def test_magnets_without_valid_hash_dedupe_by_normalized_form():
    candidates = [
        StreamCandidate(provider="A", title="one", url="magnet:?xt=urn:sha1:abc&dn=X&tr=udp%3A%2F%2Fa"),
        StreamCandidate(provider="B", title="two", url="magnet:?xt=urn:sha1:abc&dn=X&tr=udp%3A%2F%2Fb"),
        StreamCandidate(provider="C", title="no-id-1"),
        StreamCandidate(provider="C", title="no-id-2"),
    ]

    result = dedupe_candidates(candidates)

    assert [c.title for c in result] == ["one", "no-id-1", "no-id-2"]


def test_resolution_peers_descending_scenario():
    low_res = _scored("1080p", resolution=1080, peers=5)
    high_res = _scored("2160p", resolution=2160, peers=1)

    result = sort_streams([low_res, high_res], SortConfig.build("desc", ["resolution", "peers"]))

    assert [s.stream.title for s in result] == ["2160p", "1080p"]


def test_ties_fall_through_to_next_field():
    a = _scored("few", resolution=1080, peers=1)
    b = _scored("many", resolution=1080, peers=9)

    desc = sort_streams([a, b], SortConfig.build("desc", ["resolution", "peers"]))
    asc = sort_streams([a, b], SortConfig.build("asc", ["resolution", "peers"]))

    assert [s.stream.title for s in desc] == ["many", "few"]
    assert [s.stream.title for s in asc] == ["few", "many"]


def test_unmeasurable_values_sort_last_in_both_directions():
    known = _scored("known", peers=0)
    unknown = _scored("unknown", peers=None)

    for order in ("asc", "desc"):
        result = sort_streams([unknown, known], SortConfig.build(order, ["peers"]))
        assert [s.stream.title for s in result] == ["known", "unknown"]


def test_language_sorts_lexicographically_with_absent_last():
    items = [_scored("none", language=None), _scored("pt", language="portuguese"), _scored("en", language="english")]

    result = sort_streams(items, SortConfig.build("asc", ["language"]))

    assert [s.stream.title for s in result] == ["en", "pt", "none"]


def test_sort_config_drops_unknown_fields_and_defaults():
    assert SortConfig.build("DESC", ["peers", "bogus"]).fields == ("peers",)
    assert SortConfig.build(None, []).fields == ("resolution", "peers", "language")
    assert SortConfig.build("sideways", ["size"]).order == "desc"
    assert SortConfig.build("asc", ["size"]).cache_token() == "asc:size"


def test_ordinal_ranks():
    assert resolution_score("2160P") > resolution_score("1080P") > resolution_score(None) == 0
    assert codec_score("AV1") > codec_score("HEVC x265") > codec_score("x264") > codec_score("VP9") > codec_score("MPEG4")
    assert source_score("BLURAY") > source_score("WEBDL") > source_score("WEBRIP") > source_score("HDRIP")
    assert source_score("HDTV") > source_score("DVDRIP") > source_score("CAM")
    assert hdr_score("Dolby Vision") > hdr_score("HDR10+") > hdr_score("HDR10") > hdr_score(None)
    assert audio_score("ATMOS") > audio_score("DTS-HD MA") > audio_score("DTS") > audio_score("DDP5.1")
    assert audio_score("DDP5.1") > audio_score("AC3") > audio_score("AAC")


def test_compute_scores_prefers_provider_values():
    candidate = StreamCandidate(provider="A", seeds=None, leechers=4, size_bytes=123, languages=["Spanish"])
    info = parse_release_info("Movie 1080p WEB-DL x264 English 2 GB")

    scores = compute_scores(candidate, info)

    assert scores["resolution"] == 1080
    assert scores["peers"] == 4
    assert scores["size"] == 123
    assert scores["language"] == "spanish"
    assert scores["source"] == source_score("WEBDL")


def test_compute_scores_marks_missing_values():
    scores = compute_scores(StreamCandidate(provider="A"), ReleaseInfo())

    assert scores["peers"] is None
    assert scores["size"] is None
    assert scores["codec"] is None
    assert scores["language"] is None
    assert scores["resolution"] == 0
    assert scores["hdr"] == 0
