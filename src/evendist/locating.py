"""Ring-shaped regions to draw locations from"""

from __future__ import annotations

import dataclasses
import enum
from abc import ABC, abstractmethod
from typing import Any, Protocol

import chex
import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from evendist.sampling import (
    DEFAULT_MAX_RETRIES,
    InvalidParameter,
    circle_sample,
    square_biased,
    square_uniform,
    validate_bias,
    validate_radii,
    validate_retries,
)


class Ring(Protocol):
    def bbox(self) -> tuple[tuple[int, int], tuple[int, int]]:
        ...

    def contains(self, xy: ArrayLike, tolerance: float = 0.0) -> jax.Array:
        ...

    def distance(self, xy: ArrayLike) -> jax.Array:
        ...

    def sample(
        self,
        key: chex.PRNGKey | None = None,
        shape: tuple[int, ...] = (),
    ) -> jax.Array:
        ...


@dataclasses.dataclass(frozen=True)
class _RingBase(ABC):
    radius_max: int
    radius_min: int = 0
    shrink: float = 0.0
    center: float = 0.5
    origin: tuple[int, int] = (0, 0)
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self) -> None:
        validate_radii(self.radius_max, self.radius_min)
        validate_bias(self.shrink, self.center, allow_zero_shrink=True)
        validate_retries(self.max_retries)
        if len(self.origin) != 2:
            raise InvalidParameter(f"Origin must be a pair, got {self.origin}")

    @property
    def is_uniform(self) -> bool:
        return self.shrink == 0.0

    def bbox(self) -> tuple[tuple[int, int], tuple[int, int]]:
        ox, oy = self.origin
        r = self.radius_max
        return (ox - r, ox + r), (oy - r, oy + r)

    @abstractmethod
    def _distance(self, offset: jax.Array) -> jax.Array:
        ...

    @abstractmethod
    def sample(
        self,
        key: chex.PRNGKey | None = None,
        shape: tuple[int, ...] = (),
    ) -> jax.Array:
        ...

    def distance(self, xy: ArrayLike) -> jax.Array:
        """Distance from the origin in the metric of this ring"""
        offset = jnp.asarray(xy, dtype=jnp.float64) - jnp.array(self.origin, dtype=jnp.float64)
        return self._distance(offset)

    def contains(self, xy: ArrayLike, tolerance: float = 0.0) -> jax.Array:
        d = self.distance(xy)
        return jnp.logical_and(
            self.radius_min - tolerance <= d,
            d <= self.radius_max + tolerance,
        )


@dataclasses.dataclass(frozen=True)
class SquareRing(_RingBase):
    def _distance(self, offset: jax.Array) -> jax.Array:
        return jnp.max(jnp.abs(offset), axis=-1)

    def sample(
        self,
        key: chex.PRNGKey | None = None,
        shape: tuple[int, ...] = (),
    ) -> jax.Array:
        if self.is_uniform:
            xy = square_uniform(self.radius_max, self.radius_min, key=key, shape=shape)
        else:
            xy = square_biased(
                self.radius_max,
                self.radius_min,
                self.shrink,
                self.center,
                key=key,
                shape=shape,
                max_retries=self.max_retries,
            )
        return xy + jnp.array(self.origin, dtype=jnp.int32)


@dataclasses.dataclass(frozen=True)
class CircleRing(_RingBase):
    def _distance(self, offset: jax.Array) -> jax.Array:
        return jnp.linalg.norm(offset, ord=2, axis=-1)

    def sample(
        self,
        key: chex.PRNGKey | None = None,
        shape: tuple[int, ...] = (),
    ) -> jax.Array:
        xy = circle_sample(
            self.radius_max,
            self.radius_min,
            self.shrink,
            self.center,
            key=key,
            shape=shape,
            max_retries=self.max_retries,
        )
        return xy + jnp.array(self.origin, dtype=jnp.int32)


class Shape(str, enum.Enum):
    """Shapes of the region between the inner and the outer radius"""

    CIRCLE = "circle"
    SQUARE = "square"

    def __call__(self, *args: Any, **kwargs: Any) -> Ring:
        if self is Shape.CIRCLE:
            return CircleRing(*args, **kwargs)
        elif self is Shape.SQUARE:
            return SquareRing(*args, **kwargs)
        else:
            raise AssertionError("Unreachable")
