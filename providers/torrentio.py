"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
import random
from typing import List
from urllib.parse import quote

from models.stream import StreamCandidate
from providers.base import PROVIDER_ERRORS, ProbeCapable, ProbeResult, Provider, ProviderResult

logger = logging.getLogger(__name__)


class TorrentioProvider(Provider, ProbeCapable):
    """Addon Stremio público (JSON /stream/<type>/<id>.json)."""

    PROVIDER_TYPE = 'torrentio'
    DEFAULT_BASE_URL = 'https://torrentio.strem.fun'
    DISPLAY_NAME = 'Torrentio'
    MIRRORS = (
        'https://torrentio.strem.fun',
        'https://torrentio.devkds.workers.dev',
    )

    def _bases(self) -> List[str]:
        if self.base_url and self.base_url not in self.MIRRORS:
            return [self.base_url]
        return list(self.MIRRORS)

    async def probe(self, timeout: float) -> ProbeResult:
        async with self._session(timeout) as session:
            for base in self._bases():
                try:
                    data = await self._get_json(session, f"{base}/manifest.json")
                    if data:
                        return ProbeResult(ok=True, detail=base)
                except PROVIDER_ERRORS as e:
                    logger.debug(f"[Torrentio] probe {base}: {type(e).__name__}")
        return ProbeResult(ok=False)

    async def fetch_streams(self, media_type: str, media_id: str, timeout: float) -> ProviderResult:
        base = random.choice(self._bases())
        url = f"{base}/stream/{quote(media_type, safe='')}/{quote(media_id, safe='')}.json"
        try:
            async with self._session(timeout) as session:
                data = await self._get_json(session, url)
        except PROVIDER_ERRORS as e:
            return self._failed(e)

        raw_streams = data.get('streams') if isinstance(data, dict) else None
        streams = []
        for item in raw_streams or []:
            if not isinstance(item, dict):
                continue
            candidate = StreamCandidate.from_dict(item, provider=self.name)
            candidate.provider = self.name
            if not candidate.title:
                candidate.title = self.name
            if not candidate.description:
                candidate.description = str(item.get('overview') or '')
            streams.append(candidate)
        return self._ok(streams)
