"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.config import Config
from cache.stream_cache import StreamCache
from core.descriptions import build_description
from core.enrichers.swarm_enricher import SwarmEnricher, SwarmOptions
from core.processors.stream_processor import (
    ScoredStream,
    SortConfig,
    compute_scores,
    dedupe_candidates,
    sort_streams,
)
from exceptions.provider_exceptions import (
    MalformedCandidateError,
    ProviderError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from magnet.codec import append_trackers, build_magnet, extract_info_hash
from models.stream import AggregatedStream, StreamCandidate
from providers.base import ProbeCapable, Provider, ProviderResult
from telemetry.boosts import BoostsFeed, get_boosts_feed
from tracker.urls import is_tracker_url, to_sources, unique
from utils.parsing.release_info import parse_release_info
from utils.text.titles import build_series_display_title, extract_season_episode, parse_series_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateOptions:
    mode: str = Config.VALIDATION_MODE
    limit: int = Config.TRACKERS_LIMIT
    max_trackers: int = Config.MAX_TRACKERS  # 0 = anexa todos
    trackers_total: int = 0  # Tamanho da lista antes da validação (telemetria)
    probe_providers: bool = Config.PROBE_PROVIDERS
    probe_timeout: float = Config.PROBE_TIMEOUT
    fetch_timeout: float = Config.PROVIDER_FETCH_TIMEOUT
    swarm: SwarmOptions = field(default_factory=lambda: SwarmOptions(
        enabled=Config.SWARM_ENABLED,
        top_n=Config.SWARM_TOP_N,
        timeout=Config.SWARM_TIMEOUT,
        missing_only=Config.SWARM_MISSING_ONLY,
    ))
    sort: SortConfig = field(default_factory=lambda: SortConfig.build(Config.SORT_ORDER, Config.SORT_FIELDS))
    label_name: str = Config.LABEL_NAME
    binge_group: str = Config.BINGE_GROUP
    desc_require_details: bool = Config.DESC_REQUIRE_DETAILS
    desc_append_original: bool = Config.DESC_APPEND_ORIGINAL


# Candidato já com magnet montado (etapa 5)
@dataclass
class _Resolved:
    candidate: StreamCandidate
    info_hash: str
    magnet: str
    trackers_added: int


def build_cache_key(media_type: str, media_id: str, provider_names: Sequence[str], sort: SortConfig) -> str:
    names = ','.join(sorted(provider_names))
    return f"agg:{names}:{media_type}:{media_id}:sort:{sort.cache_token()}"


def _trackers_to_attach(trackers: Sequence[str], max_trackers: int) -> List[str]:
    selected = unique(t for t in trackers if is_tracker_url(t))
    if max_trackers > 0:
        return selected[:max_trackers]
    return selected


class StreamAggregator:
    """Orquestra providers, deduplicação, magnets, swarm, descrição e ordenação.

    aggregate() nunca levanta exceção: falhas degradam o resultado (menos
    streams) e lista vazia significa "nada disponível agora".
    """

    def __init__(
        self,
        cache: Optional[StreamCache] = None,
        enricher: Optional[SwarmEnricher] = None,
        telemetry: Optional[BoostsFeed] = None,
    ):
        self.cache = cache if cache is not None else StreamCache()
        self.enricher = enricher if enricher is not None else SwarmEnricher()
        self.telemetry = telemetry if telemetry is not None else get_boosts_feed()

    # ------------------------------------------------------------------
    # Etapas 2 e 3: providers
    # ------------------------------------------------------------------

    async def _is_alive(self, provider: Provider, timeout: float) -> bool:
        if not isinstance(provider, ProbeCapable):
            return True
        try:
            result = await asyncio.wait_for(provider.probe(timeout), timeout)
        except asyncio.TimeoutError:
            logger.debug(f"[Aggregator] probe de {provider.name} excedeu {timeout}s")
            return False
        except Exception as e:  # noqa: BLE001
            logger.debug(f"[Aggregator] probe de {provider.name} falhou: {type(e).__name__}")
            return False
        return bool(result and result.ok)

    async def _live_providers(self, providers: Sequence[Provider], options: AggregateOptions) -> List[Provider]:
        if not options.probe_providers:
            return list(providers)
        alive = await asyncio.gather(*(self._is_alive(p, options.probe_timeout) for p in providers))
        live = [provider for provider, ok in zip(providers, alive) if ok]
        skipped = [provider.name for provider, ok in zip(providers, alive) if not ok]
        if skipped:
            logger.info(f"[Aggregator] providers ignorados (probe): {', '.join(skipped)}")
        return live

    async def _fetch_one(self, provider: Provider, media_type: str, media_id: str, timeout: float) -> ProviderResult:
        try:
            result = await asyncio.wait_for(provider.fetch_streams(media_type, media_id, timeout), timeout)
        except asyncio.TimeoutError:
            raise ProviderTimeoutError(provider.name, timeout)
        if not isinstance(result, ProviderResult):
            raise ProviderUnavailableError(provider.name, "resposta inválida")
        return result

    async def _fetch_all(
        self,
        providers: Sequence[Provider],
        media_type: str,
        media_id: str,
        timeout: float,
    ) -> List[StreamCandidate]:
        results = await asyncio.gather(
            *(self._fetch_one(p, media_type, media_id, timeout) for p in providers),
            return_exceptions=True,
        )
        candidates: List[StreamCandidate] = []
        for provider, result in zip(providers, results):
            if isinstance(result, ProviderError):
                logger.debug(f"[Aggregator] {result.tag}: {result}")
                continue
            if isinstance(result, BaseException):
                logger.debug(f"[Aggregator] provider_unavailable: {provider.name}: {type(result).__name__}")
                continue
            if not result.ok:
                logger.debug(f"[Aggregator] provider_unavailable: {provider.name}: {result.error}")
                continue
            candidates.extend(result.streams)
        return candidates

    # ------------------------------------------------------------------
    # Etapa 5: magnets
    # ------------------------------------------------------------------

    def _resolve(self, candidate: StreamCandidate, trackers: Sequence[str]) -> _Resolved:
        if candidate.has_magnet:
            magnet = append_trackers(candidate.url, trackers)
            info_hash = (candidate.info_hash or extract_info_hash(candidate.url)).lower()
        elif candidate.info_hash:
            info_hash = candidate.info_hash.lower()
            magnet = build_magnet(info_hash, candidate.title, trackers)
        else:
            raise MalformedCandidateError(candidate.provider, "sem magnet nem info_hash")
        if not magnet:
            raise MalformedCandidateError(candidate.provider, "magnet não pôde ser construído")
        return _Resolved(candidate=candidate, info_hash=info_hash, magnet=magnet, trackers_added=len(trackers))

    def _resolve_all(self, candidates: Sequence[StreamCandidate], trackers: Sequence[str]) -> List[_Resolved]:
        resolved = []
        for candidate in candidates:
            try:
                resolved.append(self._resolve(candidate, trackers))
            except MalformedCandidateError as e:
                logger.debug(f"[Aggregator] {e.tag}: {e}")
        return resolved

    # ------------------------------------------------------------------
    # Etapas 7 e 8: apresentação
    # ------------------------------------------------------------------

    def _hints(self, candidate: StreamCandidate, options: AggregateOptions) -> Tuple[Tuple[str, Any], ...]:
        hints: Dict[str, Any] = dict(candidate.behavior_hints)
        if options.binge_group:
            hints['bingeGroup'] = options.binge_group
        return tuple(sorted(hints.items()))

    def _to_scored(
        self,
        item: _Resolved,
        sources: Tuple[str, ...],
        episode: Optional[Tuple[int, int]],
        options: AggregateOptions,
    ) -> ScoredStream:
        candidate = item.candidate
        info = parse_release_info(f"{candidate.title}\n{candidate.description}", item.magnet)
        description = build_description(
            candidate,
            info,
            item.trackers_added,
            options.label_name,
            episode=episode,
            require_details=options.desc_require_details,
            append_original=options.desc_append_original,
        )
        stream = AggregatedStream(
            name=options.label_name,
            title=candidate.title,
            description=description,
            info_hash=item.info_hash,
            sources=sources if item.info_hash else (),
            behavior_hints=self._hints(candidate, options),
            file_idx=candidate.file_idx,
            url='' if item.info_hash else item.magnet,
        )
        return ScoredStream(stream=stream, scores=compute_scores(candidate, info))

    # ------------------------------------------------------------------
    # Etapa 9: telemetria
    # ------------------------------------------------------------------

    def _emit(
        self,
        media_type: str,
        media_id: str,
        providers: Sequence[Provider],
        trackers: Sequence[str],
        streams: List[AggregatedStream],
        episode: Optional[Tuple[int, int]],
        options: AggregateOptions,
    ) -> None:
        if not streams:
            return
        title = streams[0].title
        if media_type == 'series':
            # Id sem :S:E cai no SxxEyy do título
            episode = episode or extract_season_episode(title)
            title = build_series_display_title(title) or title
        event = {
            'mode': options.mode,
            'limit': options.max_trackers,
            'healthy': len(trackers),
            'total': options.trackers_total or len(trackers),
            'source': 'aggregate: ' + ', '.join(p.name for p in providers),
            'type': media_type,
            'id': media_id,
            'title': title,
        }
        if episode:
            event['season'], event['episode'] = episode
        self.telemetry.push(event)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _aggregate(
        self,
        media_type: str,
        media_id: str,
        providers: Sequence[Provider],
        trackers: Sequence[str],
        options: AggregateOptions,
    ) -> List[AggregatedStream]:
        started = time.time()
        cache_key = build_cache_key(media_type, media_id, [p.name for p in providers], options.sort)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"[Aggregator] cache hit: {cache_key}")
            return cached

        live = await self._live_providers(providers, options)
        candidates = await self._fetch_all(live, media_type, media_id, options.fetch_timeout)
        unique_candidates = dedupe_candidates(candidates)

        attach = _trackers_to_attach(trackers, options.max_trackers)
        resolved = self._resolve_all(unique_candidates, attach)

        sources = tuple(to_sources(attach))
        enriched = await self.enricher.enrich(
            [item.candidate for item in resolved],
            [item.info_hash for item in resolved],
            sources,
            options.swarm,
        )
        for item, candidate in zip(resolved, enriched):
            item.candidate = candidate

        episode = parse_series_id(media_id) if media_type == 'series' else None
        scored = [self._to_scored(item, sources, episode, options) for item in resolved]
        streams = [item.stream for item in sort_streams(scored, options.sort)]

        if not streams:
            # Resultado vazio não é cacheado
            logger.info(f"[Aggregator] {media_type}/{media_id}: nenhum stream ({len(candidates)} candidatos)")
            return []

        self.cache.set(cache_key, streams)
        self._emit(media_type, media_id, providers, trackers, streams, episode, options)

        logger.info(
            f"[Aggregator] {media_type}/{media_id}: {len(streams)} streams "
            f"({len(candidates)} candidatos de {len(live)}/{len(providers)} providers, "
            f"{len(attach)} trackers, {time.time() - started:.1f}s)"
        )
        return streams

    async def aggregate(
        self,
        media_type: str,
        media_id: str,
        providers: Sequence[Provider],
        trackers: Sequence[str],
        options: Optional[AggregateOptions] = None,
    ) -> List[AggregatedStream]:
        options = options or AggregateOptions()
        try:
            return await self._aggregate(media_type, media_id, list(providers), list(trackers), options)
        except Exception as e:  # noqa: BLE001
            logger.error(f"[Aggregator] erro inesperado em {media_type}/{media_id}: {type(e).__name__}: {e}")
            return []
