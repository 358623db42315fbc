"""Command line interface to draw points from a configured ring"""
from pathlib import Path
from typing import Optional

import jax
import jax.numpy as jnp
import typer

from evendist.config import RingConfig, load_config
from evendist.placement import place

app = typer.Typer(pretty_exceptions_show_locals=False)


def _load(config_path: Optional[Path], override: str, seed: Optional[int]) -> RingConfig:
    if config_path is None:
        config = RingConfig()
    else:
        config = load_config(config_path)
    config.apply_override(override)
    if seed is not None:
        config.seed = seed
    return config


def _key(config: RingConfig) -> Optional[jax.Array]:
    if config.seed is None:
        return None
    return jax.random.PRNGKey(config.seed)


@app.command()
def sample(
    n: int = 10,
    config_path: Optional[Path] = typer.Option(None, "--config"),
    override: str = "",
    seed: Optional[int] = None,
) -> None:
    """Print n points as comma separated x,y lines"""
    config = _load(config_path, override, seed)
    xy = config.make_ring().sample(key=_key(config), shape=(n,))
    for x, y in xy.tolist():
        typer.echo(f"{x},{y}")


@app.command()
def summary(
    n: int = 10000,
    config_path: Optional[Path] = typer.Option(None, "--config"),
    override: str = "",
    seed: Optional[int] = None,
) -> None:
    """Print statistics of the distance from the origin over n points"""
    config = _load(config_path, override, seed)
    ring = config.make_ring()
    distance = ring.distance(ring.sample(key=_key(config), shape=(n,)))
    typer.echo(f"shape: {config.shape.value}")
    typer.echo(f"n: {n}")
    typer.echo(f"mean: {float(jnp.mean(distance)):.3f}")
    typer.echo(f"min: {float(jnp.min(distance)):.3f}")
    typer.echo(f"max: {float(jnp.max(distance)):.3f}")


@app.command()
def locate(
    config_path: Optional[Path] = typer.Option(None, "--config"),
    override: str = "",
    seed: Optional[int] = None,
) -> None:
    """Print one point, retrying up to max_place_attempts candidates"""
    config = _load(config_path, override, seed)
    xy = place(config.max_place_attempts, config.make_ring(), key=_key(config))
    if xy is None:
        typer.echo("Failed to place a point", err=True)
        raise typer.Exit(code=1)
    x, y = xy.tolist()
    typer.echo(f"{x},{y}")


if __name__ == "__main__":
    app()
