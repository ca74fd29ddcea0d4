"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import os
from typing import List, Optional


# Converte duração (10m, 12h, 7d) para segundos
def _parse_duration(duration_str: str) -> int:
    duration_str = duration_str.strip().lower()

    if duration_str.endswith('s'):
        return int(duration_str[:-1])
    elif duration_str.endswith('m'):
        return int(duration_str[:-1]) * 60
    elif duration_str.endswith('h'):
        return int(duration_str[:-1]) * 3600
    elif duration_str.endswith('d'):
        return int(duration_str[:-1]) * 86400
    else:
        # Assume segundos se não especificado
        return int(duration_str)


# Converte "true/1/on/yes" em booleano
def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'on', 'yes')


# Converte lista separada por vírgula
def _parse_list(value: str) -> List[str]:
    return [item.strip().lower() for item in value.split(',') if item.strip()]


class Config:
    # Servidor
    PORT: int = int(os.getenv('PORT', '7006'))

    # Redis
    REDIS_HOST: Optional[str] = os.getenv('REDIS_HOST', None)  # None = não configurado
    REDIS_PORT: int = int(os.getenv('REDIS_PORT', '6379'))
    REDIS_DB: int = int(os.getenv('REDIS_DB', '0'))

    # Logging
    LOG_LEVEL: int = int(os.getenv('LOG_LEVEL', '1'))
    LOG_FORMAT: str = os.getenv('LOG_FORMAT', 'console')  # 'json' ou 'console'

    # Lista de trackers
    TRACKERS_URL: Optional[str] = os.getenv('TRACKERS_URL', None)  # sobrescreve a variante
    TRACKERS_VARIANT: str = os.getenv('TRACKERS_VARIANT', 'all').strip().lower()

    # Validação de trackers
    VALIDATION_MODE: str = os.getenv('VALIDATION_MODE', 'basic').strip().lower()  # off, basic, aggressive
    TRACKERS_LIMIT: int = int(os.getenv('TRACKERS_LIMIT', '0'))  # 0 = sem limite de trackers saudáveis
    MAX_TRACKERS: int = int(os.getenv('MAX_TRACKERS', '0'))  # 0 = anexa todos ao magnet
    HEALTH_TTL: int = _parse_duration(os.getenv('HEALTH_TTL', '24h'))

    # Cache de agregação
    STREAM_CACHE_TTL: int = _parse_duration(os.getenv('STREAM_CACHE_TTL', '90s'))
    STREAM_CACHE_STALE: int = _parse_duration(os.getenv('STREAM_CACHE_STALE', '10m'))
    SWARM_CACHE_TTL: int = _parse_duration(os.getenv('SWARM_CACHE_TTL', '30m'))

    # Providers
    PROVIDERS: List[str] = _parse_list(os.getenv('PROVIDERS', 'torrentio,yts,eztv'))
    PROBE_PROVIDERS: bool = _parse_bool(os.getenv('PROBE_PROVIDERS'), False)
    PROBE_TIMEOUT: float = float(os.getenv('PROBE_TIMEOUT', '0.5'))
    PROVIDER_FETCH_TIMEOUT: float = float(os.getenv('PROVIDER_FETCH_TIMEOUT', '3'))

    # Enriquecimento via scrape (BEP48)
    SWARM_ENABLED: bool = _parse_bool(os.getenv('SWARM_ENABLED'), False)
    SWARM_TOP_N: int = int(os.getenv('SWARM_TOP_N', '2'))
    SWARM_TIMEOUT: float = float(os.getenv('SWARM_TIMEOUT', '0.8'))
    SWARM_MISSING_ONLY: bool = _parse_bool(os.getenv('SWARM_MISSING_ONLY'), True)

    # Ordenação e apresentação
    SORT_ORDER: str = os.getenv('SORT_ORDER', 'desc').strip().lower()
    SORT_FIELDS: List[str] = _parse_list(os.getenv('SORT_FIELDS', 'resolution,peers,language'))
    LABEL_NAME: str = os.getenv('LABEL_NAME', 'DFStreams')
    BINGE_GROUP: str = os.getenv('BINGE_GROUP', 'dfstreams-optimized')
    DESC_REQUIRE_DETAILS: bool = _parse_bool(os.getenv('DESC_REQUIRE_DETAILS'), True)
    DESC_APPEND_ORIGINAL: bool = _parse_bool(os.getenv('DESC_APPEND_ORIGINAL'), False)

    # Concorrência e timeouts da validação (valores fixos - não configuráveis via ENV)
    VALIDATION_CONCURRENCY: int = 8  # Workers simultâneos na validação
    VALIDATION_RETRIES: int = 2  # Tentativas extras por tracker (3 no total)
    VALIDATION_BACKOFF: float = 0.3  # Base do backoff exponencial (segundos)
    HTTP_CHECK_TIMEOUT: float = 2.5  # HEAD/GET na origem do tracker (modo basic)
    HTTP_CHECK_TIMEOUT_AGGRESSIVE: float = 4.0  # Segunda chance HTTP no modo aggressive
    DNS_TIMEOUT: float = 2.5
    UDP_CONNECT_TIMEOUT: float = 2.5  # Handshake CONNECT (BEP15)

    # Rate limit UDP (valores fixos - não configuráveis via ENV)
    UDP_RATE_LIMIT: int = 20  # Tokens por janela
    UDP_RATE_WINDOW: int = 60  # Janela em segundos (reset total, não gradual)

    # Telemetria
    BOOSTS_MAX_ITEMS: int = 20
