"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from app.config import Config
from cache.redis_keys import health_namespace, health_key
from cache.stores import KeyValueStore, get_store
from models.health import HealthRecord

logger = logging.getLogger(__name__)


def _encode(record: HealthRecord) -> Dict[str, Any]:
    return record.to_dict()


def _decode(data: Any) -> HealthRecord:
    if isinstance(data, HealthRecord):
        return data
    return HealthRecord.from_dict(data)


# Cache de saúde de trackers (url -> HealthRecord, TTL de 24h)
class HealthCache:
    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store if store is not None else get_store(health_namespace(), _encode, _decode)
        self.ttl = float(ttl if ttl is not None else Config.HEALTH_TTL)
        self._clock = clock

    def get(self, url: str) -> Optional[HealthRecord]:
        # Registro expirado é tratado como ausente
        record = self.store.get(health_key(url))
        if record is None:
            return None
        record = _decode(record)
        if self._clock() - record.checked_at > self.ttl:
            self.store.delete(health_key(url))
            return None
        return record

    def set(self, record: HealthRecord) -> None:
        self.store.set(health_key(record.url), record, ttl_seconds=self.ttl)

    def clear(self) -> None:
        self.store.clear()

    def records(self) -> List[HealthRecord]:
        now = self._clock()
        result = []
        for _, value in self.store.items():
            record = _decode(value)
            if now - record.checked_at <= self.ttl:
                result.append(record)
        return result

    def stats(self, sample_size: int = 10) -> Dict[str, Any]:
        """Resumo do cache para o endpoint de saúde"""
        records = self.records()
        ok = sum(1 for record in records if record.ok)
        return {
            'ok': ok,
            'bad': len(records) - ok,
            'total': len(records),
            'ttl': int(self.ttl),
            'sample': [record.to_dict() for record in records[:sample_size]],
        }
