"""Place a point in a ring, skipping locations that callers refuse"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import chex
import jax
import jax.numpy as jnp
from loguru import logger

from evendist.locating import Ring

# Takes (N, 2) candidates and returns a (N,) mask that is True where landing is denied
LocationRestrictor = Callable[[jax.Array], jax.Array]


def denied_by(
    candidates: jax.Array,
    restrictors: Sequence[LocationRestrictor],
) -> jax.Array:
    denied = jnp.zeros(candidates.shape[:-1], dtype=bool)
    for restrictor in restrictors:
        denied = jnp.logical_or(denied, restrictor(candidates))
    return denied


def place(
    n_trial: int,
    ring: Ring,
    restrictors: Sequence[LocationRestrictor] = (),
    *,
    key: chex.PRNGKey | None = None,
) -> jax.Array | None:
    """Returns the first of ``n_trial`` candidates that no restrictor denies.

    Restrictors only ever see points that the ring already produced.
    Returns `None` if every candidate was denied.
    """
    if n_trial < 1:
        raise ValueError(f"n_trial must be positive, got {n_trial}")
    candidates = ring.sample(key=key, shape=(n_trial,))
    ok = jnp.logical_not(denied_by(candidates, restrictors))
    (ok_idx,) = jnp.nonzero(ok, size=1, fill_value=-1)
    ok_idx = int(ok_idx[0])
    if ok_idx < 0:
        logger.warning(f"Failed to place a point in {n_trial} trials")
        return None
    logger.debug(f"Placed a point after {ok_idx + 1} trials")
    return candidates[ok_idx]
