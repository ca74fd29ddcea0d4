"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

"""
Scrape HTTP (BEP-0048) para obter seeds/leechers de um info_hash.

Somente announces http(s) são usados; UDP fica de fora deste componente.
Cada URL é limitada pelo timeout e a primeira resposta válida vence.
"""

import asyncio
import logging
from typing import Iterable, List, Optional
from urllib.parse import urlsplit, urlunsplit

import aiohttp
import bencodepy
from yarl import URL

from exceptions.magnet_exceptions import InvalidInfoHashError
from exceptions.scrape_exceptions import ScrapeError, ScrapeMalformedError, ScrapeUnreachableError
from magnet.parser import MagnetParser
from models.stream import SwarmStats
from tracker.urls import strip_source_prefix

logger = logging.getLogger(__name__)


def http_announces(announce_urls: Iterable[str]) -> List[str]:
    result = []
    for value in announce_urls or []:
        url = strip_source_prefix(value)
        if url.lower().startswith(('http://', 'https://')):
            result.append(url)
    return result


# /announce vira /scrape (primeira ocorrência); sem /announce, acrescenta /scrape
def to_scrape_url(announce_url: str) -> str:
    try:
        parts = urlsplit(announce_url)
    except ValueError:
        return ''
    if not parts.scheme or not parts.netloc:
        return ''
    path = parts.path
    if '/announce' in path:
        path = path.replace('/announce', '/scrape', 1)
    else:
        path = (path if path.endswith('/') else path + '/') + 'scrape'
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ''))


def percent_encode_bytes(raw: bytes) -> str:
    return ''.join(f"%{byte:02X}" for byte in raw)


def build_scrape_request(scrape_url: str, info_hash: bytes) -> URL:
    separator = '&' if '?' in scrape_url else '?'
    # encoded=True evita que o yarl recodifique os bytes do info_hash
    return URL(f"{scrape_url}{separator}info_hash={percent_encode_bytes(info_hash)}", encoded=True)


# Lê files[<20 bytes>].complete/.incomplete da resposta bencode
def parse_scrape_response(body: bytes, info_hash: bytes, scrape_url: str = '') -> SwarmStats:
    try:
        decoded = bencodepy.decode(body)
    except Exception as e:  # noqa: BLE001
        raise ScrapeMalformedError(scrape_url, f"bencode inválido: {e}")

    if not isinstance(decoded, dict):
        raise ScrapeMalformedError(scrape_url, "raiz não é dicionário")
    if b'failure reason' in decoded:
        reason = decoded[b'failure reason']
        if isinstance(reason, bytes):
            reason = reason.decode('utf-8', errors='replace')
        raise ScrapeMalformedError(scrape_url, f"tracker recusou: {reason}")

    files = decoded.get(b'files')
    if not isinstance(files, dict):
        raise ScrapeMalformedError(scrape_url, "campo files ausente")
    entry = files.get(info_hash)
    if not isinstance(entry, dict):
        raise ScrapeMalformedError(scrape_url, "info_hash ausente em files")

    seeds = entry.get(b'complete')
    leechers = entry.get(b'incomplete')
    if not isinstance(seeds, int) or not isinstance(leechers, int):
        raise ScrapeMalformedError(scrape_url, "complete/incomplete inválidos")
    return SwarmStats(seeds=max(0, seeds), leechers=max(0, leechers))


class SwarmScraper:
    def __init__(self, user_agent: str = "DFStreams/1.0"):
        self.user_agent = user_agent

    async def _fetch(self, session: aiohttp.ClientSession, scrape_url: str, info_hash: bytes) -> SwarmStats:
        request_url = build_scrape_request(scrape_url, info_hash)
        try:
            async with session.get(request_url, allow_redirects=True) as response:
                if response.status != 200:
                    raise ScrapeUnreachableError(scrape_url, f"HTTP {response.status}")
                body = await response.read()
        except aiohttp.ClientError as e:
            raise ScrapeUnreachableError(scrape_url, type(e).__name__)
        return parse_scrape_response(body, info_hash, scrape_url)

    async def scrape(
        self,
        info_hash: str,
        announce_urls: Iterable[str],
        timeout: float = 0.8,
    ) -> Optional[SwarmStats]:
        """Retorna SwarmStats do primeiro announce que responder, ou None.

        Nunca levanta exceção; cada URL respeita o timeout informado.
        """
        try:
            raw_hash = MagnetParser.decode_info_hash(info_hash)
        except InvalidInfoHashError as e:
            logger.debug(f"[Swarm] {e}")
            return None

        scrape_urls = [url for url in (to_scrape_url(a) for a in http_announces(announce_urls)) if url]
        if not scrape_urls:
            return None

        headers = {'User-Agent': self.user_agent}
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout, headers=headers) as session:
                for scrape_url in scrape_urls:
                    try:
                        stats = await asyncio.wait_for(self._fetch(session, scrape_url, raw_hash), timeout)
                        logger.debug(
                            f"[Swarm] {raw_hash.hex()} via {scrape_url}: seed={stats.seeds} leech={stats.leechers}"
                        )
                        return stats
                    except asyncio.TimeoutError:
                        logger.debug(f"[Swarm] scrape_unreachable: timeout em {scrape_url}")
                    except ScrapeError as e:
                        logger.debug(f"[Swarm] {e.tag}: {e}")
        except Exception as e:  # noqa: BLE001
            logger.debug(f"[Swarm] erro inesperado no scrape de {info_hash}: {type(e).__name__}: {e}")
        return None
