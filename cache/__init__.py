"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from cache.redis_client import init_redis, get_redis_client
from cache.stores import KeyValueStore, MemoryStore, RedisStore, get_store
from cache.health_cache import HealthCache
from cache.stream_cache import CacheEntry, StreamCache
from cache.swarm_cache import SwarmCache

__all__ = [
    'init_redis',
    'get_redis_client',
    'KeyValueStore',
    'MemoryStore',
    'RedisStore',
    'get_store',
    'HealthCache',
    'CacheEntry',
    'StreamCache',
    'SwarmCache',
]
