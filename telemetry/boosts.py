"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
import threading
import time
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from app.config import Config

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# Buffer circular com os eventos de "boost" mais recentes (não persiste entre reinícios)
class BoostsFeed:
    def __init__(self, max_items: int = Config.BOOSTS_MAX_ITEMS):
        self.max_items = max_items
        self._items: deque = deque(maxlen=max_items)
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def _normalize(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        event = {
            'time': now.isoformat().replace('+00:00', 'Z'),
            'ts': int(time.time() * 1000),
            'mode': str(entry.get('mode') or '').lower(),
            'limit': _optional_int(entry.get('limit')) or 0,
            'healthy': _optional_int(entry.get('healthy')) or 0,
            'total': _optional_int(entry.get('total')) or 0,
            'source': str(entry.get('source') or ''),
            'type': str(entry.get('type') or ''),
            'id': str(entry.get('id') or ''),
            'title': str(entry.get('title') or ''),
        }
        season = _optional_int(entry.get('season'))
        episode = _optional_int(entry.get('episode'))
        if season is not None:
            event['season'] = season
        if episode is not None:
            event['episode'] = episode
        return event

    def push(self, entry: Dict[str, Any]) -> None:
        """Registra o evento e notifica ouvintes; nunca levanta exceção."""
        try:
            event = self._normalize(entry)
            with self._lock:
                self._items.appendleft(event)
                listeners = list(self._listeners)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"[Boosts] evento descartado: {e}")
            return
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:  # noqa: BLE001
                logger.debug(f"[Boosts] ouvinte falhou: {e}")

    def recent(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(item) for item in self._items]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._listeners.clear()


_boosts_feed = BoostsFeed()


def get_boosts_feed() -> BoostsFeed:
    return _boosts_feed
