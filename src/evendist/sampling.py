"""Sample integer points inside square and circular rings.

All samplers take the outer radius first and the inner radius second, and
return an ``int32`` array of shape ``(*shape, 2)``. Parameters are checked
before any PRNG key is resolved, so a rejected call never consumes entropy.
"""

from __future__ import annotations

import functools
import math

import chex
import jax
import jax.numpy as jnp
from loguru import logger

from evendist.entropy import resolve_key
from evendist.matrix import multiply, random_rotation

DEFAULT_MAX_RETRIES = 1000
# Points are returned as int32
MAX_RADIUS = 2**31 - 1


class InvalidParameter(ValueError):
    pass


class DistributionUnsatisfiable(RuntimeError):
    pass


def validate_radii(radius_max: int, radius_min: int) -> None:
    if radius_max < 0 or radius_min < 0:
        raise InvalidParameter(
            f"Radii must be non-negative, got max={radius_max} and min={radius_min}"
        )
    if radius_min > radius_max:
        raise InvalidParameter(
            f"radius_min ({radius_min}) is larger than radius_max ({radius_max})"
        )
    if radius_max > MAX_RADIUS:
        raise InvalidParameter(f"radius_max must not exceed {MAX_RADIUS}, got {radius_max}")


def validate_bias(shrink: float, center: float, allow_zero_shrink: bool) -> None:
    if not 0.0 <= center <= 1.0:
        raise InvalidParameter(f"Center must be between 0 and 1 inclusive, got {center}")
    if not (shrink > 0.0 or (allow_zero_shrink and shrink == 0.0)):
        raise InvalidParameter(f"Shrink must be positive, got {shrink}")


def validate_retries(max_retries: int) -> None:
    if max_retries < 1:
        raise InvalidParameter(f"max_retries must be at least 1, got {max_retries}")


def _ratio(radius_min: int, radius_max: int) -> float:
    # A zero outer radius only admits the origin
    return radius_min / radius_max if radius_max > 0 else 0.0


@functools.partial(jax.jit, static_argnames=("shape",))
def _bounded_gaussian_impl(
    key: chex.PRNGKey,
    shrink: float,
    center: float,
    max_retries: int,
    shape: tuple[int, ...],
) -> tuple[jax.Array, jax.Array]:
    def cond(carry: tuple[jax.Array, ...]) -> jax.Array:
        _, _, accepted, n_tried = carry
        return jnp.logical_and(n_tried < max_retries, jnp.logical_not(jnp.all(accepted)))

    def body(carry: tuple[jax.Array, ...]) -> tuple[jax.Array, ...]:
        key, value, accepted, n_tried = carry
        key, normal_key = jax.random.split(key)
        candidate = jax.random.normal(normal_key, shape=shape) / shrink + center
        in_range = jnp.logical_and(0.0 <= candidate, candidate < 1.0)
        value = jnp.where(jnp.logical_and(in_range, jnp.logical_not(accepted)), candidate, value)
        return key, value, jnp.logical_or(accepted, in_range), n_tried + 1

    init = (
        key,
        jnp.zeros(shape),
        jnp.zeros(shape, dtype=bool),
        jnp.array(0, dtype=jnp.int32),
    )
    _, value, accepted, _ = jax.lax.while_loop(cond, body, init)
    return value, accepted


def _bounded_gaussian(
    key: chex.PRNGKey,
    shrink: float,
    center: float,
    max_retries: int,
    shape: tuple[int, ...],
) -> jax.Array:
    value, accepted = _bounded_gaussian_impl(key, shrink, center, max_retries, shape)
    if not bool(jnp.all(accepted)):
        n_failed = int(jnp.sum(jnp.logical_not(accepted)))
        logger.warning(
            f"{n_failed} gaussian draws stayed outside [0, 1) after {max_retries} tries"
            + f" (shrink={shrink}, center={center})"
        )
        raise DistributionUnsatisfiable(
            f"No value in [0, 1) after {max_retries} tries with shrink={shrink} and"
            + f" center={center}. Use a larger shrink or a center further from the bounds."
        )
    return value


def bounded_gaussian(
    shrink: float,
    center: float,
    *,
    key: chex.PRNGKey | None = None,
    shape: tuple[int, ...] = (),
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> jax.Array:
    """Sample ``normal / shrink + center``, redrawing until it falls in [0, 1).

    Each element is redrawn at most ``max_retries`` times. When that is not
    enough, `DistributionUnsatisfiable` is raised instead of looping forever.
    """
    validate_bias(shrink, center, allow_zero_shrink=False)
    validate_retries(max_retries)
    return _bounded_gaussian(resolve_key(key), shrink, center, max_retries, shape)


@functools.partial(jax.jit, static_argnames=("shape",))
def _square_uniform_impl(
    key: chex.PRNGKey,
    radius_max: int,
    radius_min: int,
    shape: tuple[int, ...],
) -> jax.Array:
    uniform_key, rotation_key = jax.random.split(key)
    u = jax.random.uniform(uniform_key, (*shape, 2))
    # One L-shaped quarter of the ring, with area (max^2 - min^2)
    far = u[..., 0] * (radius_max - radius_min) + radius_min
    near = u[..., 1] * (radius_max + radius_min) - radius_min
    xy = multiply(random_rotation(rotation_key, shape), jnp.stack((far, near), axis=-1))
    return jnp.trunc(xy).astype(jnp.int32)


def square_uniform(
    radius_max: int,
    radius_min: int,
    *,
    key: chex.PRNGKey | None = None,
    shape: tuple[int, ...] = (),
) -> jax.Array:
    """Points spread evenly over the area between two concentric squares.

    ``|x|`` and ``|y|`` never exceed ``radius_max``, and at least one of them
    is no smaller than ``radius_min``.
    """
    validate_radii(radius_max, radius_min)
    return _square_uniform_impl(resolve_key(key), radius_max, radius_min, shape)


@jax.jit
def _square_biased_impl(
    key: chex.PRNGKey,
    g: jax.Array,
    radius_max: int,
    s0: float,
) -> jax.Array:
    r0_key, flip_key, rotation_key = jax.random.split(key, 3)
    s1 = 1.0 - s0
    r0 = jax.random.uniform(r0_key, g.shape)
    r1 = g * s0 + jnp.sqrt(g) * s1
    x = s0 + s1 * r1
    y = s0 * r0 + r0 * r1 * s1
    y = jnp.where(jax.random.bernoulli(flip_key, shape=g.shape), -y, y)
    xy = multiply(random_rotation(rotation_key, g.shape), jnp.stack((x, y), axis=-1))
    return jnp.trunc(xy * radius_max).astype(jnp.int32)


def square_biased(
    radius_max: int,
    radius_min: int,
    shrink: float,
    center: float,
    *,
    key: chex.PRNGKey | None = None,
    shape: tuple[int, ...] = (),
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> jax.Array:
    """Points in a square ring, clustered around a radius.

    The cluster sits near ``radius_min + center * (radius_max - radius_min)``,
    and a larger ``shrink`` makes it denser.
    """
    validate_radii(radius_max, radius_min)
    validate_bias(shrink, center, allow_zero_shrink=False)
    validate_retries(max_retries)
    gaussian_key, key = jax.random.split(resolve_key(key))
    g = _bounded_gaussian(gaussian_key, shrink, center, max_retries, shape)
    return _square_biased_impl(key, g, radius_max, _ratio(radius_min, radius_max))


@jax.jit
def _circle_impl(key: chex.PRNGKey, u: jax.Array, radius_max: int, a: float) -> jax.Array:
    theta = jax.random.uniform(key, u.shape, minval=0.0, maxval=2.0 * jnp.pi)
    # Uniform in squared radius is uniform in area
    r = jnp.sqrt(u * (1.0 - a) + a)
    xy = jnp.stack((r * jnp.cos(theta), r * jnp.sin(theta)), axis=-1) * radius_max
    return jnp.round(xy).astype(jnp.int32)


def circle_sample(
    radius_max: int,
    radius_min: int,
    shrink: float = 0.0,
    center: float = 0.0,
    *,
    key: chex.PRNGKey | None = None,
    shape: tuple[int, ...] = (),
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> jax.Array:
    """Points between two concentric circles.

    With ``shrink == 0`` the points are uniform in area. Otherwise the squared
    radius fraction is drawn by `bounded_gaussian`, so points cluster where
    ``(r^2 - min^2) / (max^2 - min^2)`` is close to ``center``.
    """
    validate_radii(radius_max, radius_min)
    validate_bias(shrink, center, allow_zero_shrink=True)
    validate_retries(max_retries)
    radial_key, angle_key = jax.random.split(resolve_key(key))
    if shrink == 0.0:
        u = jax.random.uniform(radial_key, shape)
    else:
        u = _bounded_gaussian(radial_key, shrink, center, max_retries, shape)
    a = math.pow(_ratio(radius_min, radius_max), 2.0)
    return _circle_impl(angle_key, u, radius_max, a)


def circle_uniform(
    radius_max: int,
    radius_min: int,
    *,
    key: chex.PRNGKey | None = None,
    shape: tuple[int, ...] = (),
) -> jax.Array:
    return circle_sample(radius_max, radius_min, 0.0, 0.0, key=key, shape=shape)


def circle_biased(
    radius_max: int,
    radius_min: int,
    shrink: float,
    center: float,
    *,
    key: chex.PRNGKey | None = None,
    shape: tuple[int, ...] = (),
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> jax.Array:
    """Same as `circle_sample`. ``shrink == 0`` falls back to uniform."""
    return circle_sample(
        radius_max,
        radius_min,
        shrink,
        center,
        key=key,
        shape=shape,
        max_retries=max_retries,
    )
