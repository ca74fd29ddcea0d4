"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from typing import Tuple

from models.stream import StreamCandidate
from providers.base import PROVIDER_ERRORS, ProbeCapable, ProbeResult, Provider, ProviderResult, imdb_from_id
from utils.text.titles import parse_series_id


# season/episode vêm como string na API
def _same_episode(torrent: dict, wanted: Tuple[int, int]) -> bool:
    try:
        return (int(torrent.get('season')), int(torrent.get('episode'))) == wanted
    except (TypeError, ValueError):
        return False


class EZTVProvider(Provider, ProbeCapable):
    """API JSON do EZTV (somente séries)."""

    PROVIDER_TYPE = 'eztv'
    DEFAULT_BASE_URL = 'https://eztv.re/api'
    DISPLAY_NAME = 'EZTV'

    async def probe(self, timeout: float) -> ProbeResult:
        try:
            async with self._session(timeout) as session:
                data = await self._get_json(session, f"{self.base_url}/get-torrents?limit=1")
        except PROVIDER_ERRORS as e:
            return ProbeResult(ok=False, detail=type(e).__name__)
        return ProbeResult(ok=bool(data))

    async def fetch_streams(self, media_type: str, media_id: str, timeout: float) -> ProviderResult:
        imdb = imdb_from_id(media_id)
        if media_type != 'series' or not imdb:
            return self._ok([])

        # A API do EZTV espera o id IMDb sem o prefixo "tt"
        url = f"{self.base_url}/get-torrents?imdb_id={imdb[2:]}&limit=100"
        try:
            async with self._session(timeout) as session:
                data = await self._get_json(session, url)
        except PROVIDER_ERRORS as e:
            return self._failed(e)

        torrents = data.get('torrents') if isinstance(data, dict) else None
        wanted = parse_series_id(media_id)
        streams = []
        for torrent in torrents or []:
            magnet = str(torrent.get('magnet_url') or '')
            if not magnet.startswith('magnet:?'):
                continue
            if wanted and not _same_episode(torrent, wanted):
                continue
            streams.append(StreamCandidate.from_dict({
                'title': torrent.get('title') or self.name,
                'url': magnet,
                'seeds': torrent.get('seeds'),
                'leechers': torrent.get('peers'),
                'sizeBytes': torrent.get('size_bytes'),
            }, provider=self.name))
        return self._ok(streams)
