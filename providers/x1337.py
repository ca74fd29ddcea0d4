"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import asyncio
import logging
from typing import List, Optional, Tuple
from urllib.parse import quote

import aiohttp
from bs4 import BeautifulSoup

from models.stream import StreamCandidate
from providers.base import (
    BROWSER_HEADERS,
    PROVIDER_ERRORS,
    ProbeCapable,
    ProbeResult,
    Provider,
    ProviderResult,
)

logger = logging.getLogger(__name__)

CINEMETA_URL = 'https://v3-cinemeta.strem.io/meta'
MAX_DETAIL_PAGES = 5
MAX_MAGNETS = 30


def parse_detail_links(html: str) -> List[str]:
    doc = BeautifulSoup(html, 'html.parser')
    links = []
    for anchor in doc.select('a[href^="/torrent/"]'):
        href = anchor.get('href')
        if href and href not in links:
            links.append(href)
    return links


def parse_magnets(html: str) -> List[str]:
    doc = BeautifulSoup(html, 'html.parser')
    magnets = []
    for anchor in doc.select('a[href^="magnet:?"]'):
        href = anchor.get('href')
        if href and href not in magnets:
            magnets.append(href)
    return magnets


class X1337Provider(Provider, ProbeCapable):
    """Busca HTML no 1337x (título vem do Cinemeta)."""

    PROVIDER_TYPE = 'x1337'
    DEFAULT_BASE_URL = 'https://www.1377x.to'
    DISPLAY_NAME = '1337x'
    MIRRORS = (
        'https://www.1377x.to',
        'https://www.1337x.to',
        'https://1337x.to',
    )

    async def probe(self, timeout: float) -> ProbeResult:
        async with self._session(timeout, headers=BROWSER_HEADERS) as session:
            for base in self.MIRRORS:
                try:
                    async with session.get(f"{base}/", max_redirects=2) as response:
                        # 403/404 atrás de Cloudflare também indicam que o espelho responde
                        if 200 <= response.status < 400 or response.status in (403, 404):
                            return ProbeResult(ok=True, detail=base)
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.debug(f"[1337x] probe {base}: {type(e).__name__}")
        return ProbeResult(ok=False)

    async def _fetch_title(self, session: aiohttp.ClientSession, media_type: str, media_id: str) -> Optional[Tuple[str, str]]:
        url = f"{CINEMETA_URL}/{quote(media_type, safe='')}/{quote(media_id.split(':')[0], safe='')}.json"
        try:
            data = await self._get_json(session, url)
        except PROVIDER_ERRORS as e:
            logger.debug(f"[1337x] Cinemeta falhou para {media_id}: {type(e).__name__}")
            return None
        meta = data.get('meta') if isinstance(data, dict) else None
        if not meta:
            return None
        title = meta.get('name') or meta.get('title') or ''
        return title, str(meta.get('year') or '')

    async def _get_text(self, session: aiohttp.ClientSession, url: str) -> str:
        try:
            async with session.get(url) as response:
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"[1337x] falha em {url}: {type(e).__name__}")
            return ''

    async def fetch_streams(self, media_type: str, media_id: str, timeout: float) -> ProviderResult:
        try:
            async with self._session(timeout, headers=BROWSER_HEADERS) as session:
                meta = await self._fetch_title(session, media_type, media_id)
                if not meta or not meta[0]:
                    return self._ok([])
                title = meta[0]

                search_html = await self._get_text(session, f"{self.base_url}/search/{quote(title, safe='')}/1/")
                detail_links = parse_detail_links(search_html)[:MAX_DETAIL_PAGES]
                pages = await asyncio.gather(
                    *(self._get_text(session, f"{self.base_url}{link}") for link in detail_links)
                )
        except PROVIDER_ERRORS as e:
            return self._failed(e)

        magnets = []
        for page in pages:
            for magnet in parse_magnets(page):
                if magnet not in magnets:
                    magnets.append(magnet)
        streams = [
            StreamCandidate(provider=self.name, title=title, url=magnet)
            for magnet in magnets[:MAX_MAGNETS]
        ]
        return self._ok(streams)
