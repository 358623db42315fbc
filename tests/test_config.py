from pathlib import Path

import jax.numpy as jnp
from serde import toml

from evendist.config import RingConfig, load_config
from evendist.locating import CircleRing, Shape, SquareRing

PROJECT_ROOT = Path(__file__).parent.parent


def test_circle_config() -> None:
    config = load_config(PROJECT_ROOT / "config/ring/circle-uniform.toml")
    assert config.shape == "circle"
    assert config.radius_min == 200
    assert config.seed is None
    ring = config.make_ring()
    assert isinstance(ring, CircleRing)
    assert ring.is_uniform


def test_square_config() -> None:
    with open(PROJECT_ROOT / "config/ring/square-biased.toml") as f:
        config = toml.from_toml(RingConfig, f.read())

    assert config.shape is Shape.SQUARE
    assert config.origin == (120, -40)
    assert config.seed == 42
    ring = config.make_ring()
    assert isinstance(ring, SquareRing)
    assert ring.shrink == 4.0 and ring.center == 0.25
    assert ring.max_retries == 500
    assert ring.contains(jnp.array([1120, -40])).item()


def test_override() -> None:
    config = RingConfig()
    config.apply_override("")
    assert config == RingConfig()
    config.apply_override('{"shape": "square", "radius_min": 10, "origin": [1, 2]}')
    assert config.shape is Shape.SQUARE
    assert config.radius_min == 10
    assert config.origin == (1, 2)
    assert isinstance(config.make_ring(), SquareRing)
