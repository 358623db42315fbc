"""Configuration of a sampling ring"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import serde
from serde import toml

from evendist.locating import Ring, Shape
from evendist.sampling import DEFAULT_MAX_RETRIES


@serde.serde
@dataclasses.dataclass
class RingConfig:
    shape: Shape = Shape.CIRCLE
    radius_max: int = 1000
    radius_min: int = 0
    gaussian_shrink: float = 0.0
    gaussian_center: float = 0.5
    origin: tuple[int, int] = (0, 0)
    max_retries: int = DEFAULT_MAX_RETRIES
    max_place_attempts: int = 10
    seed: int | None = None

    def apply_override(self, override: str) -> None:
        if 0 < len(override):
            override_dict = json.loads(override)
            for key, value in override_dict.items():
                if key == "shape":
                    value = Shape(value)
                elif key == "origin":
                    value = tuple(value)
                setattr(self, key, value)

    def make_ring(self) -> Ring:
        return self.shape(
            radius_max=self.radius_max,
            radius_min=self.radius_min,
            shrink=self.gaussian_shrink,
            center=self.gaussian_center,
            origin=self.origin,
            max_retries=self.max_retries,
        )


def load_config(path: Path) -> RingConfig:
    with path.open("r") as f:
        return toml.from_toml(RingConfig, f.read())
