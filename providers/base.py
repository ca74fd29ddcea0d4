"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import aiohttp

from models.stream import StreamCandidate

logger = logging.getLogger(__name__)

_IMDB_REGEX = re.compile(r'tt\d{7,8}', re.IGNORECASE)

BROWSER_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
}


@dataclass
class ProviderResult:
    ok: bool
    provider: str
    streams: List[StreamCandidate] = field(default_factory=list)
    error: str = ''


@dataclass(frozen=True)
class ProbeResult:
    ok: bool
    detail: str = ''


# Extrai o id IMDb (tt1234567) do id Stremio ("tt1234567:1:2")
def imdb_from_id(media_id: str) -> str:
    match = _IMDB_REGEX.search(str(media_id or ''))
    return match.group(0).lower() if match else ''


# Classe base para providers de streams
class Provider(ABC):
    PROVIDER_TYPE: str = ''
    DEFAULT_BASE_URL: str = ''
    DISPLAY_NAME: str = ''

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or self.DEFAULT_BASE_URL or '').rstrip('/')

    @property
    def name(self) -> str:
        return self.DISPLAY_NAME or self.__class__.__name__

    def _session(self, timeout: float, headers: Optional[Dict[str, str]] = None) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout),
            headers=headers or {'User-Agent': 'DFStreams/1.0', 'Accept': 'application/json'},
        )

    async def _get_json(self, session: aiohttp.ClientSession, url: str, **kwargs) -> Any:
        async with session.get(url, **kwargs) as response:
            if response.status >= 400:
                raise aiohttp.ClientResponseError(
                    response.request_info, response.history, status=response.status
                )
            # content_type=None: alguns espelhos respondem JSON como text/html
            return await response.json(content_type=None)

    def _ok(self, streams: List[StreamCandidate]) -> ProviderResult:
        return ProviderResult(ok=True, provider=self.name, streams=streams)

    def _failed(self, error: BaseException) -> ProviderResult:
        logger.debug(f"[{self.name}] falha: {type(error).__name__}: {error}")
        return ProviderResult(ok=False, provider=self.name, error=type(error).__name__)

    @abstractmethod
    async def fetch_streams(self, media_type: str, media_id: str, timeout: float) -> ProviderResult:
        """Busca candidatos para (tipo, id) dentro do timeout."""
        ...


# Capacidade opcional: checagem rápida de disponibilidade
class ProbeCapable(ABC):
    @abstractmethod
    async def probe(self, timeout: float) -> ProbeResult:
        ...


# Erros de rede/JSON que um provider trata como "sem resultados"
PROVIDER_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)
