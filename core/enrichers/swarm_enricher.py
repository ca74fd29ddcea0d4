"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from cache.swarm_cache import SwarmCache
from models.stream import StreamCandidate, SwarmStats
from tracker.swarm import SwarmScraper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwarmOptions:
    enabled: bool = False
    top_n: int = 2  # 0 = todos os candidatos
    timeout: float = 0.8  # Por candidato (segundos)
    missing_only: bool = True  # Só quem veio sem seeds/leechers do provider


# Enriquece os primeiros candidatos com seeds/leechers via scrape HTTP (best-effort)
class SwarmEnricher:
    def __init__(self, scraper: Optional[SwarmScraper] = None, cache: Optional[SwarmCache] = None):
        self.scraper = scraper or SwarmScraper()
        self.cache = cache if cache is not None else SwarmCache()

    def _wants(self, index: int, candidate: StreamCandidate, info_hash: str, options: SwarmOptions) -> bool:
        if not info_hash:
            return False
        if options.top_n > 0 and index >= options.top_n:
            return False
        if options.missing_only and candidate.has_swarm_data:
            return False
        return True

    async def _stats_for(self, info_hash: str, sources: Sequence[str], timeout: float) -> Optional[SwarmStats]:
        cached = self.cache.get(info_hash)
        if cached is not None:
            return cached
        try:
            stats = await asyncio.wait_for(self.scraper.scrape(info_hash, sources, timeout), timeout)
        except asyncio.TimeoutError:
            logger.debug(f"[SwarmEnricher] timeout no scrape de {info_hash}")
            return None
        if stats is not None:
            self.cache.set(info_hash, stats)
        return stats

    async def enrich(
        self,
        candidates: List[StreamCandidate],
        info_hashes: List[str],
        sources: Sequence[str],
        options: SwarmOptions,
    ) -> List[StreamCandidate]:
        """Retorna nova lista; candidatos sem dados de swarm ficam como estavam."""
        if not options.enabled or not sources:
            return list(candidates)

        targets = [
            index for index, candidate in enumerate(candidates)
            if self._wants(index, candidate, info_hashes[index], options)
        ]
        if not targets:
            return list(candidates)

        results = await asyncio.gather(
            *(self._stats_for(info_hashes[index], sources, options.timeout) for index in targets),
            return_exceptions=True,
        )

        enriched = list(candidates)
        attached = 0
        for index, result in zip(targets, results):
            if isinstance(result, BaseException):
                logger.debug(f"[SwarmEnricher] erro no scrape de {info_hashes[index]}: {type(result).__name__}")
                continue
            if result is None:
                continue
            enriched[index] = candidates[index].with_swarm(result)
            attached += 1

        logger.debug(f"[SwarmEnricher] {attached}/{len(targets)} candidatos enriquecidos")
        return enriched
