"""Discrete rotations used to spread asymmetric samples over all quadrants"""

from __future__ import annotations

import chex
import jax
import jax.numpy as jnp

ROTATION_0 = jnp.array([[1.0, 0.0], [0.0, 1.0]])
ROTATION_90 = jnp.array([[0.0, -1.0], [1.0, 0.0]])
ROTATION_180 = jnp.array([[-1.0, 0.0], [0.0, -1.0]])
ROTATION_270 = jnp.array([[0.0, 1.0], [-1.0, 0.0]])
ROTATIONS_0_90_180_270 = jnp.stack((ROTATION_0, ROTATION_90, ROTATION_180, ROTATION_270))


def multiply(matrix: jax.Array, vector: jax.Array) -> jax.Array:
    """Matrix-vector product, broadcast over leading batch dimensions"""
    return jnp.einsum("...ij,...j->...i", matrix, vector)


def random_rotation(key: chex.PRNGKey, shape: tuple[int, ...] = ()) -> jax.Array:
    index = jax.random.randint(key, shape, 0, 4)
    return ROTATIONS_0_90_180_270[index]
