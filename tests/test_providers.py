import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

import providers.x1337 as x1337
from providers import available_provider_types, create_provider, create_providers
from providers.base import imdb_from_id
from providers.eztv import EZTVProvider
from providers.torrentio import TorrentioProvider
from providers.x1337 import X1337Provider, parse_detail_links, parse_magnets
from providers.yts import YTSProvider

from conftest import HASH_A, HASH_B


async def _serve(routes):
    app = web.Application()
    for path, handler in routes.items():
        app.router.add_get(path, handler)
    server = TestServer(app)
    await server.start_server()
    return server


def test_registry_discovers_all_providers():
    types = available_provider_types()

    assert {"torrentio", "yts", "eztv", "x1337"} <= set(types)
    assert types["x1337"]["display_name"] == "1337x"
    assert types["torrentio"]["probe"] is True


def test_create_provider_rejects_unknown_names():
    with pytest.raises(ValueError):
        create_provider("nope")

    created = create_providers(["yts", "nope", "EZTV"])
    assert [p.name for p in created] == ["YTS", "EZTV"]


def test_imdb_from_stremio_id():
    assert imdb_from_id("tt0944947:1:2") == "tt0944947"
    assert imdb_from_id("kitsu:123") == ""


@pytest.mark.asyncio
async def test_torrentio_maps_stremio_streams():
    async def stream(request):
        assert request.match_info["id"] == "tt0111161.json"
        return web.json_response({"streams": [
            {"name": "Torrentio\n1080p", "title": "Movie.1080p.BluRay\n👤 12", "infoHash": HASH_A, "fileIdx": 0,
             "behaviorHints": {"bingeGroup": "torrentio|1080p"}},
            "garbage",
        ]})

    server = await _serve({"/stream/movie/{id}": stream})
    try:
        provider = TorrentioProvider(base_url=str(server.make_url("/")))
        result = await provider.fetch_streams("movie", "tt0111161", 2)
    finally:
        await server.close()

    assert result.ok is True
    assert result.provider == "Torrentio"
    assert len(result.streams) == 1
    candidate = result.streams[0]
    assert candidate.info_hash == HASH_A
    assert candidate.file_idx == 0
    assert candidate.behavior_hints == {"bingeGroup": "torrentio|1080p"}


@pytest.mark.asyncio
async def test_provider_http_error_is_reported_not_raised():
    async def fail(request):
        return web.Response(status=503)

    server = await _serve({"/stream/movie/{id}": fail})
    try:
        result = await TorrentioProvider(base_url=str(server.make_url("/"))).fetch_streams("movie", "tt1", 2)
    finally:
        await server.close()

    assert result.ok is False
    assert result.streams == []
    assert result.error == "ClientResponseError"


@pytest.mark.asyncio
async def test_yts_only_serves_movies():
    async def list_movies(request):
        assert request.query["query_term"] == "tt0111161"
        return web.json_response({"status": "ok", "data": {"movies": [{
            "title": "The Movie",
            "torrents": [
                {"hash": HASH_B.upper(), "quality": "1080p", "type": "bluray", "seeds": 30, "peers": 4,
                 "size": "2.1 GB", "size_bytes": 2254857830},
                {"hash": "", "quality": "720p"},
            ],
        }]}})

    server = await _serve({"/list_movies.json": list_movies})
    try:
        provider = YTSProvider(base_url=str(server.make_url("/")))
        movie = await provider.fetch_streams("movie", "tt0111161", 2)
        series = await provider.fetch_streams("series", "tt0111161:1:1", 2)
    finally:
        await server.close()

    assert [c.title for c in movie.streams] == ["The Movie 1080p bluray"]
    assert movie.streams[0].info_hash == HASH_B
    assert movie.streams[0].seeds == 30
    assert movie.streams[0].size_bytes == 2254857830
    assert series.ok is True and series.streams == []


@pytest.mark.asyncio
async def test_eztv_filters_requested_episode():
    async def get_torrents(request):
        assert request.query["imdb_id"] == "0944947"
        return web.json_response({"torrents": [
            {"title": "Show S01E02 720p", "magnet_url": f"magnet:?xt=urn:btih:{HASH_A}", "season": "1", "episode": "2",
             "seeds": 3, "peers": 1},
            {"title": "Show S01E03 720p", "magnet_url": f"magnet:?xt=urn:btih:{HASH_B}", "season": "1", "episode": "3"},
            {"title": "broken", "magnet_url": "", "season": "1", "episode": "2"},
        ]})

    server = await _serve({"/get-torrents": get_torrents})
    try:
        result = await EZTVProvider(base_url=str(server.make_url("/"))).fetch_streams("series", "tt0944947:1:2", 2)
    finally:
        await server.close()

    assert [c.title for c in result.streams] == ["Show S01E02 720p"]
    assert result.streams[0].has_magnet


def test_x1337_html_parsing():
    search_html = (
        "<table><tr><td class='name'><a href='/sub/1/'>icon</a>"
        "<a href='/torrent/111/Movie-1080p/'>Movie 1080p</a></td></tr>"
        "<tr><td class='name'><a href='/torrent/222/Movie-720p/'>Movie 720p</a></td></tr>"
        "<tr><td class='name'><a href='/torrent/111/Movie-1080p/'>dup</a></td></tr></table>"
    )
    detail_html = f"<div><a href='magnet:?xt=urn:btih:{HASH_A}&dn=Movie'>Magnet</a><a href='/other'>x</a></div>"

    assert parse_detail_links(search_html) == ["/torrent/111/Movie-1080p/", "/torrent/222/Movie-720p/"]
    assert parse_magnets(detail_html) == [f"magnet:?xt=urn:btih:{HASH_A}&dn=Movie"]


@pytest.mark.asyncio
async def test_x1337_fetches_title_then_detail_pages(monkeypatch):
    async def meta(request):
        return web.json_response({"meta": {"name": "The Movie", "year": 2020}})

    async def search(request):
        assert request.match_info["query"] == "The Movie"
        return web.Response(text="<a href='/torrent/1/a/'>a</a><a href='/torrent/2/b/'>b</a>", content_type="text/html")

    async def detail(request):
        torrent_id = request.match_info["tid"]
        info_hash = HASH_A if torrent_id == "1" else HASH_B
        return web.Response(text=f"<a href='magnet:?xt=urn:btih:{info_hash}'>m</a>", content_type="text/html")

    server = await _serve({
        "/meta/movie/{id}": meta,
        "/search/{query}/1/": search,
        "/torrent/{tid}/{slug}/": detail,
    })
    base = str(server.make_url("/")).rstrip("/")
    monkeypatch.setattr(x1337, "CINEMETA_URL", f"{base}/meta")
    try:
        result = await X1337Provider(base_url=base).fetch_streams("movie", "tt0111161", 2)
    finally:
        await server.close()

    assert result.ok is True
    assert sorted(c.url for c in result.streams) == sorted([
        f"magnet:?xt=urn:btih:{HASH_A}",
        f"magnet:?xt=urn:btih:{HASH_B}",
    ])
    assert all(c.title == "The Movie" for c in result.streams)
