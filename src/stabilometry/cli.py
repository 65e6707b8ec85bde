"""
Command-line interface for stabilometry.

Provides commands for analyzing COP recordings, sampling confidence ellipses
and managing configuration.
"""

import json
import logging

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Any

import click

from stabilometry.analysis.service import AnalysisService
from stabilometry.analysis.types import Sample, SessionMetrics
from stabilometry.config import (
    get_config_path,
    get_ellipse_point_count,
    load_config,
    set_ellipse_point_count,
)
from stabilometry.constants import PARAMETER_UNITS, Parameter, Pose, TaskCondition
from stabilometry.logging_config import setup_logging
from stabilometry.parsers.samples import SampleFormatError, load_samples

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("stabilometry")
except PackageNotFoundError:
    __version__ = "dev"

RECORDING_PATH = click.Path(exists=True, dir_okay=False)


def read_samples(path: str) -> tuple[Sample, ...]:
    """Load samples for a CLI command, converting parse errors for click."""
    try:
        return load_samples(path)
    except SampleFormatError as e:
        raise click.ClickException(str(e)) from e


def format_metrics_table(metrics: SessionMetrics) -> list[str]:
    """Render task metrics as aligned text lines."""
    lines = [
        f"{'samples':<28}{metrics.sample_count}",
        f"{'duration':<28}{metrics.duration:.3f} s",
        f"{'sample_time':<28}{metrics.sample_time:.4f} s",
    ]
    for parameter in Parameter:
        value = metrics.get_parameter(parameter)
        unit = PARAMETER_UNITS[parameter]
        lines.append(f"{parameter.value:<28}{value:.4f} {unit}")
    return lines


def metrics_payload(
    metrics: SessionMetrics, ellipse_points: int | None
) -> dict[str, Any]:
    """Build the JSON output of the analyze command."""
    payload: dict[str, Any] = metrics.model_dump(mode="json")
    if ellipse_points is not None:
        payload["ellipse_points"] = [
            [p.x, p.y]
            for p in metrics.confidence_ellipse.get_ellipse_points(
                ellipse_points, centered=True
            )
        ]
    return payload


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show version."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"stabilometry, version {__version__}")
    ctx.exit()


@click.group()
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """Stabilometry: postural sway analysis"""
    setup_logging(verbose=verbose, console_format="%(levelname)s: %(message)s")


@cli.command()
@click.argument("path", type=RECORDING_PATH)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--ellipse-points",
    type=click.IntRange(min=1),
    default=None,
    help="Include N centered ellipse boundary points in JSON output",
)
def analyze(path: str, as_json: bool, ellipse_points: int | None) -> None:
    """Compute sway metrics for one recording."""
    samples = read_samples(path)
    if len(samples) < 2:
        click.echo(
            f"Warning: {path} has {len(samples)} sample(s), all metrics are zero",
            err=True,
        )

    metrics = AnalysisService().analyze_session(samples)

    if as_json:
        click.echo(json.dumps(metrics_payload(metrics, ellipse_points), indent=2))
        return

    click.echo(f"Recording: {path}\n")
    for line in format_metrics_table(metrics):
        click.echo(f"  {line}")


@cli.command()
@click.argument("path", type=RECORDING_PATH)
@click.option(
    "--points",
    "-n",
    type=int,
    default=None,
    help="Number of boundary points (default from config)",
)
@click.option("--centered", is_flag=True, help="Shift outline onto the mean COP")
def ellipse(path: str, points: int | None, centered: bool) -> None:
    """Print confidence ellipse boundary points as CSV."""
    if points is None:
        points = get_ellipse_point_count()
    if points <= 0:
        raise click.BadParameter(
            f"must be positive, got {points}", param_hint="'--points'"
        )

    metrics = AnalysisService().analyze_session(read_samples(path))
    result = metrics.confidence_ellipse

    click.echo(
        f"# area={result.area:.6f} semi_major={result.semi_major_axis:.6f} "
        f"semi_minor={result.semi_minor_axis:.6f}"
    )
    click.echo("x,y")
    for point in result.get_ellipse_points(points, centered=centered):
        click.echo(f"{point.x:.6f},{point.y:.6f}")


@cli.command()
@click.option(
    "--pose",
    type=click.Choice([p.value for p in Pose]),
    required=True,
    help="Stance held during the measurement",
)
@click.option("--eo-solid", type=RECORDING_PATH, help="Eyes open, solid surface")
@click.option("--ec-solid", type=RECORDING_PATH, help="Eyes closed, solid surface")
@click.option("--eo-soft", type=RECORDING_PATH, help="Eyes open, soft surface")
@click.option("--ec-soft", type=RECORDING_PATH, help="Eyes closed, soft surface")
@click.option("--workers", type=int, default=1, help="Analyze tasks in parallel")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def measurement(
    pose: str,
    eo_solid: str | None,
    ec_solid: str | None,
    eo_soft: str | None,
    ec_soft: str | None,
    workers: int,
    as_json: bool,
) -> None:
    """Analyze all task recordings of one measurement."""
    paths = {
        TaskCondition.EYES_OPEN_SOLID_SURFACE: eo_solid,
        TaskCondition.EYES_CLOSED_SOLID_SURFACE: ec_solid,
        TaskCondition.EYES_OPEN_SOFT_SURFACE: eo_soft,
        TaskCondition.EYES_CLOSED_SOFT_SURFACE: ec_soft,
    }
    sessions = {
        condition: read_samples(path)
        for condition, path in paths.items()
        if path is not None
    }
    if not sessions:
        raise click.UsageError("Provide at least one task recording")

    result = AnalysisService(max_workers=workers).analyze_measurement(
        sessions, pose=Pose(pose)
    )

    if as_json:
        payload = {
            "pose": result.pose.value,
            "tasks": {
                condition.value: task.to_record()
                for condition, task in result.tasks.items()
            },
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Pose: {result.pose.value}")
    for condition, task in result.tasks.items():
        click.echo(f"\n[{condition.value}] {Path(str(paths[condition])).name}")
        for line in format_metrics_table(task):
            click.echo(f"  {line}")


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("set-ellipse-points")
@click.argument("count", type=int)
def set_ellipse_points_cmd(count: int) -> None:
    """Set default number of ellipse boundary points."""
    try:
        set_ellipse_point_count(count)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'COUNT'") from e

    click.echo(f"✓ Ellipse points: {count}")
    click.echo(f"  Config: {get_config_path()}")


@config.command("show")
def show_config_cmd() -> None:
    """Show all configuration settings."""
    config_path = get_config_path()
    if not config_path.exists():
        click.echo(f"No config file: {config_path}")
        return

    click.echo(f"Config file: {config_path}\n")
    config_data = load_config()
    if not config_data:
        click.echo("Configuration is empty.")
        return

    click.echo("Settings:")
    for section, values in config_data.items():
        if not isinstance(values, dict):
            click.echo(f"  {section} = {values!r}")
            continue
        click.echo(f"  [{section}]")
        for key, value in values.items():
            click.echo(f"    {key} = {value!r}")


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
