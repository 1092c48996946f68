"""
Augmented Canvas Backend — In-Memory Model Configuration Store
===============================================================

What:  Holds the current ModelConfig behind a reader/writer lock.
Why:   The config endpoints, the plugin and the worker may replace the config
       while calls are resolving against it; a reader must never observe a
       half-written value.
How:   get() returns a copy under a shared read lock; replace() swaps the
       stored reference under an exclusive write lock.
Who:   Read by CanvasService on every call that builds a fresh agent, by the
       DefaultAgentHolder at startup/rebuild, and by the config endpoints.

Concurrency:
    Many readers may hold the lock at once; a writer waits for active readers
    to drain and blocks new readers while it is waiting, so a stream of reads
    cannot starve a pending write. Critical sections never await, so the lock
    is safe to take from coroutines running on the event loop.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from augmented_canvas.models import ModelConfig

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers, one exclusive writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True
        try:
            yield
        finally:
            with self._cond:
                self._writer_active = False
                self._cond.notify_all()


class ConfigStore:
    """
    Thread-safe holder of the live ModelConfig.

    No semantic validation happens here: an unknown provider is stored as-is
    and only rejected by AgentFactory when an agent is built from it.
    """

    def __init__(self, initial: Optional[ModelConfig] = None):
        self._config = initial if initial is not None else ModelConfig()
        self._lock = ReadWriteLock()

    def get(self) -> ModelConfig:
        """Return a copy of the current configuration."""
        with self._lock.read():
            return self._config.model_copy()

    def replace(self, new: ModelConfig) -> None:
        """Atomically replace the whole configuration."""
        with self._lock.write():
            self._config = new
        logger.info(
            "Model configuration replaced: provider=%s model=%s api_key_env=%s base_url=%s",
            new.provider,
            new.model_name,
            new.api_key_env,
            new.base_url or "default",
        )
