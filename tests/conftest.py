import os
import sys
from pathlib import Path

import pytest

# Sem Redis nos testes: todos os caches ficam em memória
os.environ.pop("REDIS_HOST", None)

# Ensure root path is available for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from cache.stores import MemoryStore  # noqa: E402


class FakeClock:
    """Relógio controlado manualmente."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


HASH_A = "a" * 40
HASH_B = "b" * 40
HASH_C = "c" * 40
