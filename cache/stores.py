"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

"""
Stores chave/valor injetados nos caches (health, streams, swarm, listas de trackers).

MemoryStore guarda objetos Python como estão (thread-safe, TTL por entrada).
RedisStore serializa em JSON com codificador/decodificador por cache.
"""

import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import redis

from cache.redis_client import get_redis_client

logger = logging.getLogger(__name__)


# Verifica se o erro é de conexão com Redis (Redis desabilitado/indisponível)
def _is_redis_connection_error(error: Exception) -> bool:
    error_str = str(error).lower()
    connection_errors = [
        "connection refused",
        "error 111",
        "cannot connect",
        "no connection",
        "connection error",
        "connection timeout",
        "name or service not known",
    ]
    return any(err in error_str for err in connection_errors)


# Loga erros do Redis de forma mais amigável
def _log_redis_error(operation: str, error: Exception) -> None:
    if _is_redis_connection_error(error):
        logger.debug(f"Redis indisponível - {operation} ignorado")
    else:
        logger.debug(f"Erro ao {operation} no Redis: {error}")


class KeyValueStore(ABC):
    """Interface mínima get/set/delete/items usada pelos caches."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def items(self) -> Iterator[Tuple[str, Any]]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryStore(KeyValueStore):
    """Dict com TTL opcional por entrada. Thread-safe."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._store: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None
            value, expires_at = item
            if expires_at is not None and self._clock() > expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds else None
        with self._lock:
            self._store[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def items(self) -> Iterator[Tuple[str, Any]]:
        now = self._clock()
        with self._lock:
            # Remove expirados e copia para iterar fora do lock
            expired = [k for k, (_, exp) in self._store.items() if exp is not None and now > exp]
            for k in expired:
                del self._store[k]
            snapshot = [(k, v) for k, (v, _) in self._store.items()]
        return iter(snapshot)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


class RedisStore(KeyValueStore):
    """Store em Redis com prefixo por namespace; valores em JSON."""

    def __init__(
        self,
        client: redis.Redis,
        namespace: str,
        encode: Callable[[Any], Any] = lambda value: value,
        decode: Callable[[Any], Any] = lambda value: value,
    ):
        self.redis = client
        self.namespace = namespace
        self._encode = encode
        self._decode = decode

    def _key(self, key: str) -> str:
        if key.startswith(f"{self.namespace}/"):
            return key
        return f"{self.namespace}/{key}"

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self.redis.get(self._key(key))
            if not raw:
                return None
            return self._decode(json.loads(raw.decode('utf-8')))
        except json.JSONDecodeError as e:
            logger.warning(f"[RedisStore] JSON inválido em {self._key(key)}: {e}")
            return None
        except redis.RedisError as e:
            _log_redis_error("ler chave", e)
            return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        try:
            payload = json.dumps(self._encode(value), separators=(',', ':'))
            if ttl_seconds:
                self.redis.setex(self._key(key), max(1, int(ttl_seconds)), payload)
            else:
                self.redis.set(self._key(key), payload)
        except redis.RedisError as e:
            _log_redis_error("gravar chave", e)

    def delete(self, key: str) -> None:
        try:
            self.redis.delete(self._key(key))
        except redis.RedisError as e:
            _log_redis_error("remover chave", e)

    def items(self) -> Iterator[Tuple[str, Any]]:
        try:
            for raw_key in self.redis.scan_iter(match=f"{self.namespace}/*", count=500):
                key = raw_key.decode('utf-8') if isinstance(raw_key, bytes) else raw_key
                value = self.get(key)
                if value is not None:
                    yield key, value
        except redis.RedisError as e:
            _log_redis_error("listar chaves", e)

    def clear(self) -> None:
        try:
            keys = list(self.redis.scan_iter(match=f"{self.namespace}/*", count=500))
            if keys:
                self.redis.delete(*keys)
        except redis.RedisError as e:
            _log_redis_error("limpar namespace", e)


# Um MemoryStore por namespace, compartilhado dentro do processo
_memory_stores: Dict[str, MemoryStore] = {}
_memory_stores_lock = threading.Lock()


def get_memory_store(namespace: str) -> MemoryStore:
    with _memory_stores_lock:
        store = _memory_stores.get(namespace)
        if store is None:
            store = MemoryStore()
            _memory_stores[namespace] = store
        return store


# Redis primeiro, memória se Redis não está disponível desde o início
def get_store(
    namespace: str,
    encode: Callable[[Any], Any] = lambda value: value,
    decode: Callable[[Any], Any] = lambda value: value,
) -> KeyValueStore:
    client = get_redis_client()
    if client is not None:
        return RedisStore(client, namespace, encode=encode, decode=decode)
    return get_memory_store(namespace)
