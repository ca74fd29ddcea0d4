"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

"""
Validação de saúde de trackers (DNS, HTTP e handshake UDP BEP-0015).

Cada URL passa por UNCHECKED -> (cache) -> HEALTHY | UNHEALTHY ou
UNCHECKED -> CHECKING -> HEALTHY | UNHEALTHY, com o resultado gravado
no HealthCache (TTL de 24h). Nenhuma falha individual derruba o lote.
"""

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

import aiohttp

from app.config import Config
from cache.health_cache import HealthCache
from exceptions.tracker_exceptions import (
    TrackerError,
    TrackerDNSError,
    TrackerHTTPError,
    TrackerRateLimitedError,
    InvalidTrackerError,
)
from models.health import HealthRecord
from tracker.rate_limiter import UdpTokenBucket
from tracker.udp_connect import udp_connect
from tracker.urls import origin_from, parse_host, parse_host_port, scheme_of

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Awaitable[bool]]
HttpProbe = Callable[[str, float], Awaitable[bool]]
UdpProbe = Callable[[str, str, int, float], Awaitable[int]]


class ValidationMode(str, Enum):
    OFF = 'off'
    BASIC = 'basic'
    AGGRESSIVE = 'aggressive'

    @classmethod
    def parse(cls, value) -> 'ValidationMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or '').strip().lower())
        except ValueError:
            logger.debug(f"Modo de validação desconhecido '{value}', usando basic")
            return cls.BASIC


@dataclass(frozen=True)
class ProgressEvent:
    processed: int
    healthy: int
    total: int
    done: bool = False
    results: Tuple[str, ...] = ()


# Tag curta gravada em HealthRecord.last_error
def _error_tag(error: TrackerError) -> str:
    if isinstance(error, TrackerRateLimitedError):
        return 'rate_limited'
    if isinstance(error, InvalidTrackerError):
        return 'no-host'
    if isinstance(error, TrackerDNSError):
        return 'dns'
    if isinstance(error, TrackerHTTPError):
        return 'http'
    return 'udp'


async def resolve_host(host: str) -> bool:
    loop = asyncio.get_running_loop()
    try:
        infos = await asyncio.wait_for(loop.getaddrinfo(host, None), Config.DNS_TIMEOUT)
    except (OSError, UnicodeError, asyncio.TimeoutError):
        return False
    return bool(infos)


def _status_ok(status: int) -> bool:
    return 200 <= status < 400


# HEAD na origem do tracker; GET como fallback quando HEAD falha
async def http_origin_ok(origin: str, timeout: float) -> bool:
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    async with aiohttp.ClientSession(timeout=client_timeout) as session:
        for method in ('HEAD', 'GET'):
            try:
                async with session.request(method, origin, max_redirects=2, allow_redirects=True) as response:
                    if _status_ok(response.status):
                        return True
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.debug(f"[Validator] {method} {origin} falhou: {type(e).__name__}")
    return False


class TrackerValidator:
    def __init__(
        self,
        cache: Optional[HealthCache] = None,
        rate_limiter: Optional[UdpTokenBucket] = None,
        resolver: Resolver = resolve_host,
        http_probe: HttpProbe = http_origin_ok,
        udp_probe: UdpProbe = udp_connect,
        concurrency: int = Config.VALIDATION_CONCURRENCY,
        retries: int = Config.VALIDATION_RETRIES,
        backoff: float = Config.VALIDATION_BACKOFF,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.cache = cache if cache is not None else HealthCache()
        self.rate_limiter = rate_limiter if rate_limiter is not None else UdpTokenBucket(
            Config.UDP_RATE_LIMIT, Config.UDP_RATE_WINDOW
        )
        self._resolve = resolver
        self._http_probe = http_probe
        self._udp_probe = udp_probe
        self.concurrency = max(1, concurrency)
        self.retries = max(0, retries)
        self.backoff = backoff
        self._sleep = sleep
        self._clock = clock
        # Checagens em andamento por loop: mesma URL compartilha uma única task
        self._inflight: Dict[Tuple[int, str, str], asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Checagens individuais (levantam TrackerError)
    # ------------------------------------------------------------------

    async def _check_basic(self, url: str, host: str) -> None:
        if not await self._resolve(host):
            raise TrackerDNSError(url, host)
        if scheme_of(url) in ('http', 'https'):
            if not await self._http_probe(origin_from(url), Config.HTTP_CHECK_TIMEOUT):
                raise TrackerHTTPError(url, "origem não respondeu 2xx/3xx")

    async def _check_udp(self, url: str) -> None:
        host, port = parse_host_port(url)
        if not host:
            raise InvalidTrackerError(url, "host ausente")
        if not self.rate_limiter.try_acquire():
            raise TrackerRateLimitedError(url)
        await self._udp_probe(url, host, port, Config.UDP_CONNECT_TIMEOUT)

    async def _check_aggressive(self, url: str, host: str) -> None:
        scheme = scheme_of(url)
        if scheme == 'udp':
            await self._check_udp(url)
            return
        try:
            await self._check_basic(url, host)
        except TrackerHTTPError:
            # Segunda chance com timeout maior
            if not await self._http_probe(origin_from(url), Config.HTTP_CHECK_TIMEOUT_AGGRESSIVE):
                raise

    async def _check_once(self, url: str, mode: ValidationMode) -> None:
        host = parse_host(url)
        if not host:
            raise InvalidTrackerError(url, "host ausente")
        if mode is ValidationMode.AGGRESSIVE:
            await self._check_aggressive(url, host)
        else:
            await self._check_basic(url, host)

    async def _check_with_retry(self, url: str, mode: ValidationMode) -> HealthRecord:
        last_error = ''
        for attempt in range(self.retries + 1):
            try:
                await self._check_once(url, mode)
                record = HealthRecord(url=url, ok=True, checked_at=self._clock(), last_error='')
                self.cache.set(record)
                return record
            except TrackerRateLimitedError as e:
                # Sem token: falha imediata, sem cache
                logger.debug(f"[Validator] {e}")
                return HealthRecord(url=url, ok=False, checked_at=self._clock(), last_error='rate_limited')
            except TrackerError as e:
                last_error = _error_tag(e)
                logger.debug(f"[Validator] tentativa {attempt + 1} falhou para {url}: {e}")
            if attempt < self.retries:
                await self._sleep(self.backoff * (2 ** attempt))

        record = HealthRecord(url=url, ok=False, checked_at=self._clock(), last_error=last_error)
        self.cache.set(record)
        return record

    async def check(self, url: str, mode=ValidationMode.BASIC) -> HealthRecord:
        """Checa uma URL (cache consultado uma vez, depois até 3 tentativas)."""
        mode = ValidationMode.parse(mode)
        if mode is ValidationMode.OFF:
            return HealthRecord(url=url, ok=True, checked_at=self._clock(), last_error='')

        cached = self.cache.get(url)
        if cached is not None:
            return cached

        loop = asyncio.get_running_loop()
        key = (id(loop), url, mode.value)
        task = self._inflight.get(key)
        if task is None:
            task = loop.create_task(self._check_with_retry(url, mode))
            self._inflight[key] = task
            task.add_done_callback(lambda _t, k=key: self._inflight.pop(k, None))
        return await asyncio.shield(task)

    # ------------------------------------------------------------------
    # Lote com pool de workers
    # ------------------------------------------------------------------

    async def _run(
        self,
        urls: List[str],
        mode: ValidationMode,
        limit: int,
        emit: Callable[[ProgressEvent], None],
    ) -> List[str]:
        total = len(urls)
        if mode is ValidationMode.OFF:
            result = list(urls) if limit <= 0 else list(urls)[:limit]
            for index in range(len(result)):
                emit(ProgressEvent(processed=index + 1, healthy=index + 1, total=total))
            return result

        queue = deque(urls)
        healthy: List[str] = []
        state = {'processed': 0, 'stopped': False}

        async def worker() -> None:
            while not state['stopped'] and queue:
                url = queue.popleft()
                try:
                    record = await self.check(url, mode)
                    ok = record.ok
                except Exception as e:  # noqa: BLE001
                    logger.debug(f"[Validator] erro inesperado em {url}: {type(e).__name__}: {e}")
                    ok = False
                if ok:
                    healthy.append(url)
                state['processed'] += 1
                emit(ProgressEvent(processed=state['processed'], healthy=len(healthy), total=total))
                if limit > 0 and len(healthy) >= limit:
                    state['stopped'] = True

        workers = max(1, min(self.concurrency, total))
        await asyncio.gather(*(worker() for _ in range(workers)))

        if limit > 0:
            return healthy[:limit]
        return healthy

    async def filter_by_health(
        self,
        urls: Iterable[str],
        mode=ValidationMode.BASIC,
        limit: int = 0,
        on_progress: Optional[Callable[[ProgressEvent], None]] = None,
    ) -> List[str]:
        """Retorna os trackers saudáveis em ordem de conclusão (não na ordem de entrada)."""
        mode = ValidationMode.parse(mode)
        urls = list(urls)
        limit = max(0, int(limit or 0))

        def emit(event: ProgressEvent) -> None:
            if on_progress is None:
                return
            try:
                on_progress(event)
            except Exception as e:  # noqa: BLE001
                logger.debug(f"[Validator] callback de progresso falhou: {e}")

        started = time.time()
        result = await self._run(urls, mode, limit, emit)
        if mode is not ValidationMode.OFF:
            logger.info(
                f"[Validator] {len(result)}/{len(urls)} trackers saudáveis "
                f"(modo={mode.value}, limite={limit or 'sem'}, {time.time() - started:.1f}s)"
            )
        return result

    async def iter_health(
        self,
        urls: Iterable[str],
        mode=ValidationMode.BASIC,
        limit: int = 0,
    ) -> AsyncIterator[ProgressEvent]:
        """Mesmo lote de filter_by_health exposto como sequência de eventos.

        O último evento vem com done=True e a lista de saudáveis em results.
        """
        urls = list(urls)
        events: asyncio.Queue = asyncio.Queue()
        task = asyncio.ensure_future(
            self.filter_by_health(urls, mode, limit, on_progress=events.put_nowait)
        )
        task.add_done_callback(lambda _t: events.put_nowait(None))
        last = ProgressEvent(processed=0, healthy=0, total=len(urls))
        try:
            while True:
                event = await events.get()
                if event is None:
                    break
                last = event
                yield event
            result = await task
            yield ProgressEvent(
                processed=last.processed,
                healthy=len(result),
                total=len(urls),
                done=True,
                results=tuple(result),
            )
        finally:
            if not task.done():
                task.cancel()

    def stats(self) -> Dict:
        return self.cache.stats()
