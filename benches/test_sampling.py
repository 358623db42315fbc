from __future__ import annotations

import jax
import pytest

from evendist import circle_sample, square_biased, square_uniform


@pytest.mark.parametrize("n", [1, 1000, 100000])
def test_square_uniform(benchmark, n: int) -> None:
    key = jax.random.PRNGKey(1)
    _ = benchmark(lambda: square_uniform(1000, 200, key=key, shape=(n,)).block_until_ready())


@pytest.mark.parametrize("n", [1, 1000, 100000])
def test_square_biased(benchmark, n: int) -> None:
    key = jax.random.PRNGKey(1)
    _ = benchmark(
        lambda: square_biased(1000, 200, 2.0, 0.5, key=key, shape=(n,)).block_until_ready()
    )


@pytest.mark.parametrize(
    "shrink, n",
    [(0.0, 1), (0.0, 100000), (2.0, 1), (2.0, 100000)],
)
def test_circle(benchmark, shrink: float, n: int) -> None:
    key = jax.random.PRNGKey(1)
    _ = benchmark(
        lambda: circle_sample(1000, 200, shrink, 0.5, key=key, shape=(n,)).block_until_ready()
    )
