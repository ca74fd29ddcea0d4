"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
import threading
import time
from typing import Dict, List, Optional

import requests

from app.config import Config
from cache.redis_keys import tracker_list_key, tracker_list_namespace
from cache.stores import KeyValueStore, get_store
from tracker.urls import normalize_tracker, unique

logger = logging.getLogger(__name__)

_BASE_URL = "https://raw.githubusercontent.com/ngosang/trackerslist/master"

VARIANT_URLS: Dict[str, str] = {
    'all': f"{_BASE_URL}/trackers_all.txt",
    'best': f"{_BASE_URL}/trackers_best.txt",
    'all_udp': f"{_BASE_URL}/trackers_all_udp.txt",
    'all_http': f"{_BASE_URL}/trackers_all_http.txt",
    'all_ws': f"{_BASE_URL}/trackers_all_ws.txt",
    'all_ip': f"{_BASE_URL}/trackers_all_ip.txt",
    'best_ip': f"{_BASE_URL}/trackers_best_ip.txt",
}

# TTL por variante (listas "best" mudam mais rápido)
VARIANT_TTLS: Dict[str, int] = {
    'all': 12 * 3600,
    'best': 6 * 3600,
    'all_udp': 12 * 3600,
    'all_http': 12 * 3600,
    'all_ws': 12 * 3600,
    'all_ip': 24 * 3600,
    'best_ip': 12 * 3600,
}

DEFAULT_TTL = 24 * 3600

# Cache para evitar logs duplicados de carregamento de trackers
_logged_sources: Dict[str, float] = {}
_logged_sources_lock = threading.Lock()
_LOG_COOLDOWN = 60  # Só loga uma vez por minuto por source


def variant_for_url(url: str) -> Optional[str]:
    for variant, variant_url in VARIANT_URLS.items():
        if variant_url == url:
            return variant
    return None


def resolve_source_url(variant: Optional[str] = None, override: Optional[str] = None) -> str:
    if override:
        return override
    return VARIANT_URLS.get((variant or 'all').strip().lower(), VARIANT_URLS['all'])


# Uma linha por tracker; comentários e linhas que não são trackers caem fora
def parse_tracker_list(text: str) -> List[str]:
    trackers = []
    for line in (text or '').splitlines():
        tracker = normalize_tracker(line)
        if tracker:
            trackers.append(tracker)
    return unique(trackers)


def _should_log(source: str) -> bool:
    now = time.time()
    with _logged_sources_lock:
        last_logged = _logged_sources.get(source, 0)
        if now - last_logged < _LOG_COOLDOWN:
            return False
        _logged_sources[source] = now
        # Limpa entradas antigas (mantém apenas últimas 10)
        if len(_logged_sources) > 10:
            oldest_key = min(_logged_sources.items(), key=lambda x: x[1])[0]
            _logged_sources.pop(oldest_key, None)
        return True


# Fornece lista dinâmica de trackers (ngosang/trackerslist) com cache por fonte
class TrackerListProvider:

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        session: Optional[requests.Session] = None,
        request_timeout: float = 10,
    ):
        self.store = store if store is not None else get_store(tracker_list_namespace())
        self.session = session
        self.request_timeout = request_timeout
        self._lock = threading.Lock()
        # Última lista boa por fonte (usada quando a busca remota falha)
        self._last_good: Dict[str, List[str]] = {}

    def default_source(self) -> str:
        return resolve_source_url(Config.TRACKERS_VARIANT, Config.TRACKERS_URL)

    def get_trackers(self, source_url: Optional[str] = None) -> List[str]:
        source = source_url or self.default_source()

        cached = self.store.get(tracker_list_key(source))
        if cached:
            return list(cached)

        # Um fetch por vez; quem esperou reaproveita o resultado
        with self._lock:
            cached = self.store.get(tracker_list_key(source))
            if cached:
                return list(cached)

            trackers = self._fetch_remote_trackers(source)
            if trackers:
                ttl = VARIANT_TTLS.get(variant_for_url(source) or 'all', DEFAULT_TTL)
                self.store.set(tracker_list_key(source), trackers, ttl_seconds=ttl)
                self._last_good[source] = trackers
                return list(trackers)

        fallback = self._last_good.get(source, [])
        if fallback:
            logger.warning(f"Usando última lista de trackers conhecida para {source} ({len(fallback)} entradas)")
        else:
            logger.error(f"Falha ao obter lista dinâmica de trackers de {source}")
        return list(fallback)

    def _fetch_remote_trackers(self, source: str) -> Optional[List[str]]:
        if self.session is not None:
            return self._fetch_with(self.session, source)
        with requests.Session() as session:
            return self._fetch_with(session, source)

    def _fetch_with(self, session: requests.Session, source: str) -> Optional[List[str]]:
        session.headers.update({"User-Agent": "DFStreams/1.0"})
        try:
            resp = session.get(source, timeout=self.request_timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            logger.debug("Timeout ao obter trackers de %s", source)
            return None
        except requests.exceptions.ConnectionError as exc:
            error_msg = str(exc)
            if "Failed to resolve" in error_msg or "No address associated" in error_msg:
                logger.debug("Erro de DNS ao obter trackers de %s", source)
            elif "Connection refused" in error_msg:
                logger.debug("Conexão recusada ao obter trackers de %s", source)
            else:
                short_msg = error_msg.split('(')[0].strip() if '(' in error_msg else error_msg[:100]
                logger.debug("Erro de conexão ao obter trackers de %s: %s", source, short_msg)
            return None
        except requests.exceptions.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else 'unknown'
            logger.debug("Erro HTTP %s ao obter trackers de %s", status_code, source)
            return None
        except requests.exceptions.RequestException as exc:
            logger.debug("Falha ao obter trackers de %s (%s)", source, type(exc).__name__)
            return None

        trackers = parse_tracker_list(resp.text)
        if trackers and _should_log(source):
            logger.info("Lista de trackers dinâmica carregada (%s) com %d entradas.", source, len(trackers))
        return trackers or None
