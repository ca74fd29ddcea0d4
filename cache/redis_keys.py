"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import hashlib


def url_hash(url: str) -> str:
    # Gera hash MD5 de uma URL para usar como chave Redis
    return hashlib.md5(url.encode('utf-8')).hexdigest()


# ============================================================================
# 📁 health/ - Saúde de trackers (cache/health_cache.py)
# ============================================================================

def health_namespace() -> str:
    return "health"


def health_key(tracker_url: str) -> str:
    # Chave Redis para HealthRecord de um tracker (24h TTL)
    return f"{health_namespace()}/{url_hash(tracker_url)}"


# ============================================================================
# 📁 streams/ - Resultado final de agregação (cache/stream_cache.py)
# ============================================================================

def streams_namespace() -> str:
    return "streams"


def streams_key(aggregation_key: str) -> str:
    # Chave Redis para lista agregada (TTL 90s + janela stale 10m)
    return f"{streams_namespace()}/{url_hash(aggregation_key)}"


# ============================================================================
# 📁 swarm/ - Seeds/leechers via scrape (cache/swarm_cache.py)
# ============================================================================

def swarm_namespace() -> str:
    return "swarm"


def swarm_key(info_hash: str) -> str:
    # Chave Redis para SwarmStats por info_hash (30m TTL)
    return f"{swarm_namespace()}/{info_hash.lower()}"


# ============================================================================
# 📁 trackers/ - Lista dinâmica de trackers (tracker/list_provider.py)
# ============================================================================

def tracker_list_namespace() -> str:
    return "trackers"


def tracker_list_key(source_url: str) -> str:
    # Chave Redis para lista de trackers de uma fonte (6h a 24h TTL)
    return f"{tracker_list_namespace()}/list/{url_hash(source_url)}"
