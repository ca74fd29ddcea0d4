"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import threading
import time
from typing import Callable


# Token bucket das checagens UDP: reset total a cada janela, sem reposição gradual
class UdpTokenBucket:
    def __init__(self, capacity: int = 20, window: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.capacity = capacity
        self.window = window
        self._clock = clock
        self._lock = threading.Lock()
        self._tokens = capacity
        self._last_reset = clock()

    def try_acquire(self) -> bool:
        with self._lock:
            now = self._clock()
            if now - self._last_reset >= self.window:
                self._tokens = self.capacity
                self._last_reset = now
            if self._tokens <= 0:
                return False
            self._tokens -= 1
            return True

    @property
    def available(self) -> int:
        with self._lock:
            if self._clock() - self._last_reset >= self.window:
                return self.capacity
            return self._tokens
