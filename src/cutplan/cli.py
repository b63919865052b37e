"""CLI interface using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from cutplan.agent.response import create_response, error_response, from_report
from cutplan.config.settings import Settings
from cutplan.data.loader import load_observations
from cutplan.export.formatters import DashboardFormatter
from cutplan.tracking.models import TrajectoryReport
from cutplan.tracking.pipeline import report_to_dict, run_pipeline

app = typer.Typer(
    help="Weight-loss trajectory: TDEE estimate and phased projection",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ============================================================================
# Helpers
# ============================================================================


def load_settings(
    config_path: Optional[Path],
    daily_intake: Optional[float] = None,
    window_weeks: Optional[float] = None,
) -> Settings:
    """Load settings and apply command-line overrides."""
    settings = Settings.load(config_path)
    if daily_intake is not None:
        settings.plan.daily_intake = daily_intake
    if window_weeks is not None:
        settings.plan.window_weeks = window_weeks
    return settings


def build_report(
    config_path: Optional[Path],
    data_path: Optional[Path],
    daily_intake: Optional[float] = None,
    window_weeks: Optional[float] = None,
) -> tuple[Settings, TrajectoryReport]:
    """Load settings and weigh-ins, then run the pipeline.

    Raises:
        ValueError: On bad configuration or weigh-in data
    """
    settings = load_settings(config_path, daily_intake, window_weeks)
    observations = load_observations(
        settings.plan.epoch, data_path or settings.data.weighins_path
    )
    return settings, run_pipeline(observations, settings)


def fail(command: str, error: Exception, json_output: bool) -> NoReturn:
    """Report an error and exit with status 1."""
    response = error_response(command, error)
    if json_output:
        response.emit()
    else:
        console.print(f"[red]{error}[/red]")
        for suggestion in response.suggestions:
            console.print(f"[dim]{suggestion}[/dim]")
    raise typer.Exit(1)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def estimate(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Weigh-in CSV (date,weight)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    intake: Optional[float] = typer.Option(None, "--intake", help="Assumed daily intake (kcal)"),
    window: Optional[float] = typer.Option(None, "--window", help="Trailing window (weeks)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Estimate TDEE from recent weight change."""
    try:
        _, report = build_report(config, data, intake, window)
    except (ValueError, OSError) as e:
        fail("estimate", e, json_output)

    if json_output:
        payload = report_to_dict(report)
        from_report(
            "estimate",
            report,
            data={
                "estimate": payload["estimate"],
                "baseline_tdee": report.baseline_tdee,
                "used_fallback_tdee": report.used_fallback_tdee,
            },
            human_summary=f"TDEE: {report.baseline_tdee:.0f} kcal/day",
        ).emit()
    else:
        DashboardFormatter(console).format_estimate(report)
        for note in report.notes:
            console.print(f"[yellow]{note}[/yellow]")


@app.command()
def project(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Weigh-in CSV (date,weight)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    intake: Optional[float] = typer.Option(None, "--intake", help="Assumed daily intake (kcal)"),
    window: Optional[float] = typer.Option(None, "--window", help="Trailing window (weeks)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the week-by-week projection through every phase."""
    try:
        _, report = build_report(config, data, intake, window)
    except (ValueError, OSError) as e:
        fail("project", e, json_output)

    if json_output:
        payload = report_to_dict(report)
        from_report(
            "project",
            report,
            data={"projection": payload["projection"], "phases": payload["phases"]},
            human_summary=(
                f"{len(report.projection)} weeks to {report.goal_weight:g} lbs "
                f"(week {report.final_week})"
            ),
        ).emit()
    else:
        DashboardFormatter(console).format_projection(report)


@app.command()
def series(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Weigh-in CSV (date,weight)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the merged weekly series fed to the chart."""
    try:
        _, report = build_report(config, data)
    except (ValueError, OSError) as e:
        fail("series", e, json_output)

    if json_output:
        from_report(
            "series",
            report,
            data={"weekly_rows": [row.to_dict() for row in report.weekly_rows]},
            human_summary=f"{len(report.weekly_rows)} weekly rows",
        ).emit()
    else:
        DashboardFormatter(console).format_series(report)


@app.command()
def dashboard(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Weigh-in CSV (date,weight)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    intake: Optional[float] = typer.Option(None, "--intake", help="Assumed daily intake (kcal)"),
    window: Optional[float] = typer.Option(None, "--window", help="Trailing window (weeks)"),
    projection: bool = typer.Option(
        False, "--projection", "-p", help="Include the week-by-week table"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the full dashboard: stats, phases and summary."""
    try:
        _, report = build_report(config, data, intake, window)
    except (ValueError, OSError) as e:
        fail("dashboard", e, json_output)

    if json_output:
        from_report(
            "dashboard",
            report,
            data=report_to_dict(report),
            human_summary=(
                f"Lost {report.total_lost:g} lbs; {report.current_weight:g} → "
                f"{report.goal_weight:g} lbs by week {report.final_week}"
            ),
        ).emit()
    else:
        DashboardFormatter(console).format(report, show_projection=projection)


@app.command()
def chart(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Image path (.png, .svg, .pdf)"
    ),
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Weigh-in CSV (date,weight)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    zones: Optional[bool] = typer.Option(
        None, "--zones/--no-zones", help="Shade the phase zones (default from config)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Render the trajectory chart to an image file."""
    from cutplan.export.chart import render_chart

    try:
        settings, report = build_report(config, data)
        output_path = render_chart(
            report, output or settings.chart.output_path, settings.chart, show_zones=zones
        )
    except (ValueError, OSError) as e:
        fail("chart", e, json_output)

    if json_output:
        from_report(
            "chart",
            report,
            data={"output_path": str(output_path), "final_week": report.final_week},
            human_summary=f"Wrote {output_path}",
        ).emit()
    else:
        console.print(f"[green]Wrote chart:[/green] {output_path}")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the effective configuration."""
    import yaml

    try:
        settings = Settings.load(config)
    except (ValueError, OSError) as e:
        fail("config show", e, json_output)

    if json_output:
        create_response(
            "config show",
            data=settings.to_dict(),
            human_summary=f"{len(settings.phases)} phases, epoch {settings.plan.epoch}",
        ).emit()
    else:
        text = yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False)
        console.print(Syntax(text, "yaml"))


@config_app.command("init")
def config_init(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Where to write config.yaml"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config.yaml populated with the defaults."""
    settings = Settings()
    target = config or Path.home() / ".cutplan" / "config.yaml"
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)
    settings.save(target)
    console.print(f"[green]Wrote config:[/green] {target}")


if __name__ == "__main__":
    app()
