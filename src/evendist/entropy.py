"""Explicit PRNG key handling.

Every sampler takes an optional ``key``. Passing one makes the call
deterministic. Omitting it draws the next key from a stream owned by the
calling thread, so threads never share generator state.
"""

from __future__ import annotations

import secrets
import threading

import chex
import jax
from loguru import logger


class KeyStream:
    """A splittable sequence of PRNG keys that counts how many it handed out"""

    def __init__(self, seed: int) -> None:
        self._key = jax.random.PRNGKey(seed)
        self._lock = threading.Lock()
        self._n_drawn = 0

    @property
    def n_drawn(self) -> int:
        return self._n_drawn

    def next_key(self) -> chex.PRNGKey:
        with self._lock:
            self._key, key = jax.random.split(self._key)
            self._n_drawn += 1
        return key


_local = threading.local()


def seed_thread_stream(seed: int) -> KeyStream:
    stream = KeyStream(seed)
    _local.stream = stream
    return stream


def thread_stream() -> KeyStream:
    stream = getattr(_local, "stream", None)
    if stream is None:
        seed = secrets.randbits(31)
        logger.debug(f"Seeding key stream of {threading.current_thread().name}")
        stream = seed_thread_stream(seed)
    return stream


def resolve_key(key: chex.PRNGKey | None) -> chex.PRNGKey:
    if key is None:
        return thread_stream().next_key()
    return key
