"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

"""
Cache do resultado final da agregação.

Entrada fresca (idade <= ttl) é devolvida como está; entrada stale
(ttl < idade <= ttl + janela) continua sendo servida; depois disso é
removida e o chamador recalcula.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.config import Config
from cache.redis_keys import streams_namespace, streams_key
from cache.stores import KeyValueStore, get_store
from models.stream import AggregatedStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    created_at: float
    ttl: float
    payload: Tuple[AggregatedStream, ...]

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_fresh(self, now: float) -> bool:
        return self.age(now) <= self.ttl


def _encode(entry: CacheEntry) -> Dict[str, Any]:
    return {
        'created_at': entry.created_at,
        'ttl': entry.ttl,
        'payload': [stream.to_dict() for stream in entry.payload],
    }


def _decode(data: Any) -> CacheEntry:
    if isinstance(data, CacheEntry):
        return data
    return CacheEntry(
        created_at=float(data.get('created_at', 0.0)),
        ttl=float(data.get('ttl', 0.0)),
        payload=tuple(AggregatedStream.from_dict(item) for item in data.get('payload') or []),
    )


class StreamCache:
    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        ttl: Optional[float] = None,
        stale_window: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store if store is not None else get_store(streams_namespace(), _encode, _decode)
        self.ttl = float(ttl if ttl is not None else Config.STREAM_CACHE_TTL)
        self.stale_window = float(stale_window if stale_window is not None else Config.STREAM_CACHE_STALE)
        self._clock = clock

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        raw = self.store.get(streams_key(key))
        if raw is None:
            return None
        entry = _decode(raw)
        if entry.age(self._clock()) > entry.ttl + self.stale_window:
            self.store.delete(streams_key(key))
            return None
        return entry

    def get(self, key: str) -> Optional[List[AggregatedStream]]:
        entry = self.get_entry(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock()):
            logger.debug(f"[StreamCache] STALE servido: {key}")
        return list(entry.payload)

    def set(self, key: str, streams: List[AggregatedStream]) -> CacheEntry:
        entry = CacheEntry(created_at=self._clock(), ttl=self.ttl, payload=tuple(streams))
        # Store expira só depois da janela stale
        self.store.set(streams_key(key), entry, ttl_seconds=self.ttl + self.stale_window)
        return entry

    def clear(self) -> None:
        self.store.clear()
