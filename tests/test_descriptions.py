from core.descriptions import BENEFIT_LINE, build_description
from models.release import ReleaseInfo
from models.stream import StreamCandidate
from utils.parsing.release_info import parse_release_info


def test_description_lists_parsed_details():
    candidate = StreamCandidate(provider="Torrentio", seeds=12, leechers=3, description="orig")
    info = parse_release_info("Show S01E02 1080p WEB-DL DDP5.1 x264-GRP 1.2 GB")

    text = build_description(candidate, info, trackers_added=15, label="DFStreams", episode=(1, 2))
    lines = text.split("\n")

    assert lines[0] == "⚡ DFStreams +15 trackers"
    assert "📦 Provider: Torrentio" in lines
    assert "📅 Season: 1" in lines
    assert "🎬 Episode: 2" in lines
    assert "🖥️ Resolution: 1080P" in lines
    assert "🎞️ Codec: x264" in lines
    assert "🌱 Seeds: 12" in lines
    assert "👥 Peers: 3" in lines
    assert "🗜️ Size: 1.2 GB" in lines
    assert lines[-1] == BENEFIT_LINE


def test_without_details_falls_back_to_original_description():
    candidate = StreamCandidate(provider="YTS", description="provider text")

    assert build_description(candidate, ReleaseInfo(), 0, "DFStreams") == "provider text"
    assert build_description(StreamCandidate(provider="YTS"), ReleaseInfo(), 0, "DFStreams") == ""


def test_details_not_required_and_original_appended():
    candidate = StreamCandidate(provider="YTS", description="provider text")

    plain = build_description(candidate, ReleaseInfo(), 0, "DFStreams", require_details=False)
    assert plain.startswith("⚡ DFStreams optimized")

    info = parse_release_info("Movie 720p BluRay")
    appended = build_description(candidate, info, 2, "DFStreams", append_original=True)
    assert appended.endswith("provider text")
    assert appended.startswith("⚡ DFStreams +2 trackers")
