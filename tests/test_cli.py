from pathlib import Path

from typer.testing import CliRunner

from evendist.cli import app

PROJECT_ROOT = Path(__file__).parent.parent

runner = CliRunner()


def test_sample() -> None:
    result = runner.invoke(app, ["sample", "--n", "5", "--seed", "1"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert len(lines) == 5
    for line in lines:
        x, y = map(int, line.split(","))
        assert x**2 + y**2 <= 1001**2

    again = runner.invoke(app, ["sample", "--n", "5", "--seed", "1"])
    assert again.output == result.output


def test_sample_with_config() -> None:
    config_path = PROJECT_ROOT / "config/ring/square-biased.toml"
    result = runner.invoke(app, ["sample", "--n", "3", "--config", str(config_path)])
    assert result.exit_code == 0, result.output
    for line in result.output.strip().splitlines():
        x, y = map(int, line.split(","))
        assert 999 <= max(abs(x - 120), abs(y + 40)) <= 5000


def test_summary() -> None:
    override = '{"shape": "square", "radius_max": 10, "radius_min": 10}'
    result = runner.invoke(app, ["summary", "--n", "100", "--override", override])
    assert result.exit_code == 0, result.output
    assert "shape: square" in result.output
    assert "min: 10.000" in result.output
    assert "max: 10.000" in result.output


def test_locate() -> None:
    result = runner.invoke(app, ["locate", "--seed", "3"])
    assert result.exit_code == 0, result.output
    assert len(result.output.strip().split(",")) == 2
