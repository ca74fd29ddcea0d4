"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

"""
Serviços relacionados a trackers BitTorrent (validação de saúde, lista dinâmica e scrape).
"""

from app.config import Config
from .list_provider import TrackerListProvider
from .rate_limiter import UdpTokenBucket
from .swarm import SwarmScraper
from .validator import ProgressEvent, TrackerValidator, ValidationMode

_udp_bucket = UdpTokenBucket(
    capacity=Config.UDP_RATE_LIMIT,  # Checagens UDP por janela (processo inteiro)
    window=Config.UDP_RATE_WINDOW,  # Reset total a cada 60s
)

_validator = TrackerValidator(
    rate_limiter=_udp_bucket,
    concurrency=Config.VALIDATION_CONCURRENCY,  # Workers simultâneos
    retries=Config.VALIDATION_RETRIES,  # Tentativas extras por tracker
    backoff=Config.VALIDATION_BACKOFF,  # 0.3s * 2^tentativa
)

_list_provider = TrackerListProvider()

_swarm_scraper = SwarmScraper()


# Retorna instância singleton do validador de trackers
def get_tracker_validator() -> TrackerValidator:
    return _validator


# Retorna instância singleton da lista de trackers
def get_tracker_list_provider() -> TrackerListProvider:
    return _list_provider


# Retorna instância singleton do scraper de swarm
def get_swarm_scraper() -> SwarmScraper:
    return _swarm_scraper


__all__ = [
    'ProgressEvent',
    'SwarmScraper',
    'TrackerListProvider',
    'TrackerValidator',
    'UdpTokenBucket',
    'ValidationMode',
    'get_tracker_validator',
    'get_tracker_list_provider',
    'get_swarm_scraper',
]
