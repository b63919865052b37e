"""Terminal formatters for trajectory reports."""

from __future__ import annotations

from typing import Optional

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cutplan.tracking.models import ExpenditureEstimate, TrajectoryReport

# Phase accent colors, matching the chart zones
PHASE_STYLES = ["red", "dark_orange", "green", "cyan", "magenta"]


def phase_style(index: int) -> str:
    return PHASE_STYLES[index % len(PHASE_STYLES)]


def format_estimate(estimate: Optional[ExpenditureEstimate], baseline_tdee: float) -> str:
    """One-block text summary of the TDEE estimate."""
    if estimate is None:
        return (
            f"Not enough data to estimate TDEE.\n"
            f"Using fallback: {baseline_tdee:.0f} kcal/day"
        )
    return "\n".join([
        f"TDEE: {estimate.tdee} kcal/day",
        f"Daily deficit: {estimate.daily_deficit} kcal/day",
        f"Weekly loss: {estimate.weekly_loss_rate:.1f} lbs/week",
        f"Window: {estimate.weeks_analyzed:.1f} weeks",
    ])


class DashboardFormatter:
    """Render a TrajectoryReport as a rich terminal dashboard."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, report: TrajectoryReport, show_projection: bool = False) -> None:
        """Print the dashboard.

        Args:
            report: Pipeline output
            show_projection: Also print the week-by-week projection table
        """
        self._print_header(report)
        self._print_stat_cards(report)
        self._print_phase_panels(report)
        if show_projection:
            self.format_projection(report)
        self._print_footer(report)

    def _print_header(self, report: TrajectoryReport) -> None:
        header = "\n".join([
            "[bold]Weight Loss Journey[/bold]",
            f"{report.current_weight:g} lbs → {report.goal_weight:g} lbs",
            f"[dim]Started {report.epoch:%b} {report.epoch.day}, {report.epoch.year} • "
            f"Week {report.current_week:.1f}[/dim]",
        ])
        self.console.print(Panel(header, expand=True))

    def _print_stat_cards(self, report: TrajectoryReport) -> None:
        current_phase = report.current_phase
        first = report.phase_summaries[0].phase
        cards = [
            Panel(
                f"[bold magenta]{report.total_lost:g} lbs[/bold magenta]",
                title="Total Lost",
            ),
            Panel(
                f"[bold blue]{current_phase.label if current_phase else 'Goal reached'}[/bold blue]",
                title="Current Phase",
            ),
            Panel(
                f"[bold green]{max(report.to_first_milestone, 0):g} lbs[/bold green]\n"
                f"[dim]{first.goal or f'Reach {first.lower_bound_lbs:g} lbs'}[/dim]",
                title=f"To {first.lower_bound_lbs:g} lbs",
            ),
            self._next_milestone_card(report),
        ]
        self.console.print(Columns(cards, equal=True, expand=True))

    def _next_milestone_card(self, report: TrajectoryReport) -> Panel:
        milestone = report.next_milestone
        if milestone is None:
            return Panel(
                f"[bold dark_orange]{report.goal_weight:g} lbs[/bold dark_orange]\n"
                f"[dim]Final phase[/dim]",
                title="Next Milestone",
            )
        return Panel(
            f"[bold dark_orange]{milestone.lower_bound_lbs:g} lbs[/bold dark_orange]\n"
            f"[dim]{milestone.goal or milestone.label}[/dim]",
            title="Next Milestone",
        )

    def _print_phase_panels(self, report: TrajectoryReport) -> None:
        panels = []
        for i, summary in enumerate(report.phase_summaries):
            phase = summary.phase
            lines = [
                f"[bold]Target:[/bold] {summary.upper_bound_lbs:g} → "
                f"{phase.lower_bound_lbs:g} lbs ({summary.band_lbs:g} lbs)",
                f"[bold]Rate:[/bold] {phase.weekly_loss_lbs:g} lbs/week",
                f"[bold]Est. Duration:[/bold] {summary.estimated_weeks} weeks",
            ]
            if phase.strategy:
                lines.append(f"[bold]Strategy:[/bold] {phase.strategy}")
            if phase.goal:
                lines.append(f"[bold]Goal:[/bold] {phase.goal}")
            panels.append(
                Panel("\n".join(lines), title=phase.label, border_style=phase_style(i))
            )
        self.console.print(Columns(panels, equal=True, expand=True))

    def _print_footer(self, report: TrajectoryReport) -> None:
        for note in report.notes:
            self.console.print(f"[yellow]{note}[/yellow]")
        source = "fallback" if report.used_fallback_tdee else "estimated"
        self.console.print(
            f"[dim italic]Projections start from {report.baseline_tdee:.0f} kcal/day "
            f"({source} TDEE, {report.window_weeks:g}-week trailing window at "
            f"{report.daily_intake:.0f} kcal/day intake) with metabolic adaptation: "
            f"{report.adaptation_per_lb:g} kcal/day decline per lb lost[/dim italic]"
        )

    def format_estimate(self, report: TrajectoryReport) -> None:
        """Print only the TDEE estimate."""
        self.console.print(
            Panel(format_estimate(report.estimate, report.baseline_tdee), title="TDEE Estimate")
        )

    def format_projection(self, report: TrajectoryReport) -> None:
        """Print the week-by-week projection."""
        table = Table(title="Projected Trajectory")
        table.add_column("Week", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Phase", justify="center")
        table.add_column("Weight", justify="right")
        table.add_column("TDEE", justify="right")
        table.add_column("Eat", justify="right", style="green")
        table.add_column("Deficit", justify="right")

        phase_index = {s.phase.phase_id: i for i, s in enumerate(report.phase_summaries)}
        for point in report.projection:
            style = phase_style(phase_index.get(point.phase, 0))
            table.add_row(
                str(point.week_number),
                point.date.isoformat(),
                f"[{style}]{point.phase}[/{style}]",
                f"{point.weight_lbs:.1f}",
                str(point.tdee),
                str(point.daily_calories),
                str(point.deficit),
            )

        self.console.print(table)

    def format_series(self, report: TrajectoryReport) -> None:
        """Print the merged weekly series."""
        table = Table(title="Weekly Series")
        table.add_column("Week", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Actual", justify="right", style="magenta")
        table.add_column("Projected", justify="right", style="red")

        for row in report.weekly_rows:
            table.add_row(
                str(row.week_number),
                row.date,
                f"{row.weight:g}" if row.weight is not None else "-",
                f"{row.projected:.1f}" if row.projected is not None else "-",
            )

        self.console.print(table)
