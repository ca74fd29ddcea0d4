"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
from typing import Any, Dict, Optional

from app.config import Config
from cache.redis_keys import swarm_namespace, swarm_key
from cache.stores import KeyValueStore, get_store
from models.stream import SwarmStats

logger = logging.getLogger(__name__)


def _encode(stats: SwarmStats) -> Dict[str, Any]:
    return {'seeds': stats.seeds, 'leechers': stats.leechers}


def _decode(data: Any) -> SwarmStats:
    if isinstance(data, SwarmStats):
        return data
    return SwarmStats(seeds=int(data.get('seeds', 0)), leechers=int(data.get('leechers', 0)))


# Cache para dados de swarm (seeds/leechers) por info_hash
class SwarmCache:
    def __init__(self, store: Optional[KeyValueStore] = None, ttl: Optional[float] = None):
        self.store = store if store is not None else get_store(swarm_namespace(), _encode, _decode)
        self.ttl = float(ttl if ttl is not None else Config.SWARM_CACHE_TTL)

    def get(self, info_hash: str) -> Optional[SwarmStats]:
        cached = self.store.get(swarm_key(info_hash))
        if cached is None:
            # MISSs são esperados para novos hashes
            return None
        stats = _decode(cached)
        logger.debug(f"[SwarmCache] HIT: hash: {info_hash.lower()} (seed: {stats.seeds}, leech: {stats.leechers})")
        return stats

    def set(self, info_hash: str, stats: SwarmStats) -> None:
        self.store.set(swarm_key(info_hash), stats, ttl_seconds=self.ttl)
