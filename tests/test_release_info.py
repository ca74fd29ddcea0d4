from utils.parsing.release_info import parse_release_info, parse_size


def test_parse_full_release_name():
    info = parse_release_info("Inception 2010 2160p BluRay x265 HDR10 Atmos-HighCode")

    assert info.resolution == "2160P"
    assert info.source == "BLURAY"
    assert info.codec == "HEVC x265"
    assert info.hdr == "HDR10"
    assert info.audio == "ATMOS"
    assert info.group == "HighCode"


def test_hdr_precedence():
    assert parse_release_info("Movie 2160p HDR10+ DV").hdr == "HDR10+"
    assert parse_release_info("Movie 2160p DV HDR").hdr == "Dolby Vision"
    assert parse_release_info("Movie 1080p HDR").hdr == "HDR"


def test_codec_variants_are_normalized():
    assert parse_release_info("Show.S01E01.1080p.WEB-DL.H.264-GRP").codec == "x264"
    assert parse_release_info("Show.S01E01.1080p.WEB-DL.HEVC-GRP").codec == "HEVC x265"


def test_web_dl_source_is_compacted():
    assert parse_release_info("Show.S01E01.1080p.WEB-DL.x264-GRP").source == "WEBDL"


def test_bracket_group_and_languages():
    info = parse_release_info("Movie 2019 720p WEBRip Dual Audio Portuguese [YTS]")

    assert info.group == "YTS"
    assert "Portuguese" in info.languages


def test_size_is_normalized_to_bytes():
    assert parse_size("Movie 1080p 1.5 GB") == ("1.5 GB", int(1.5 * 1024 ** 3))
    assert parse_size("no size here") == (None, None)


def test_magnet_display_name_wins_over_text():
    magnet = "magnet:?xt=urn:btih:" + "a" * 40 + "&dn=Movie.2020.720p.HDTV.x264-ABC"

    info = parse_release_info("Some provider title 1080p", magnet)

    assert info.resolution == "720P"
    assert info.group == "ABC"


def test_unparseable_text_yields_empty_info():
    info = parse_release_info("")

    assert info.detail_count() == 0
    assert info.languages == []
