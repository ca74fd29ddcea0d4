"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from urllib.parse import quote

from models.stream import StreamCandidate
from providers.base import PROVIDER_ERRORS, ProbeCapable, ProbeResult, Provider, ProviderResult, imdb_from_id


class YTSProvider(Provider, ProbeCapable):
    """API JSON do YTS (somente filmes)."""

    PROVIDER_TYPE = 'yts'
    DEFAULT_BASE_URL = 'https://yts.mx/api/v2'
    DISPLAY_NAME = 'YTS'

    async def probe(self, timeout: float) -> ProbeResult:
        try:
            async with self._session(timeout) as session:
                data = await self._get_json(session, f"{self.base_url}/list_movies.json?limit=1")
        except PROVIDER_ERRORS as e:
            return ProbeResult(ok=False, detail=type(e).__name__)
        return ProbeResult(ok=isinstance(data, dict) and data.get('status') == 'ok')

    async def fetch_streams(self, media_type: str, media_id: str, timeout: float) -> ProviderResult:
        imdb = imdb_from_id(media_id)
        if media_type != 'movie' or not imdb:
            return self._ok([])

        url = f"{self.base_url}/list_movies.json?limit=1&query_term={quote(imdb, safe='')}"
        try:
            async with self._session(timeout) as session:
                payload = await self._get_json(session, url)
        except PROVIDER_ERRORS as e:
            return self._failed(e)

        data = payload.get('data') if isinstance(payload, dict) else None
        movies = (data or {}).get('movies') or []
        if not movies:
            return self._ok([])

        movie = movies[0]
        title = movie.get('title') or self.name
        streams = []
        for torrent in movie.get('torrents') or []:
            info_hash = str(torrent.get('hash') or '').lower()
            if not info_hash:
                continue
            label = f"{title} {torrent.get('quality') or ''} {torrent.get('type') or ''}".strip()
            streams.append(StreamCandidate.from_dict({
                'title': label,
                'infoHash': info_hash,
                'seeds': torrent.get('seeds'),
                'leechers': torrent.get('peers'),
                'size': torrent.get('size'),
                'sizeBytes': torrent.get('size_bytes'),
            }, provider=self.name))
        return self._ok(streams)
