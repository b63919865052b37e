"""JSON envelope for `--json` command output.

Every command wraps its result the same way so scripts can check
`success` first and then read `data`. Commands that produce a
TrajectoryReport go through `from_report`, which turns the report's
notes into warnings and adds suggestions for improving the estimate.
Failures go through `error_response`, which picks a suggestion from the
kind of error (phase config, missing file, bad weigh-in data).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, TextIO

from cutplan.tracking.models import PhaseConfigError, TrajectoryReport

SCHEMA_VERSION = "1.0"


@dataclass
class AgentResponse:
    """Result envelope shared by every command."""

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
            "schema_version": SCHEMA_VERSION,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def emit(self, file: Optional[TextIO] = None) -> None:
        """Write the JSON envelope to `file` (stdout if None)."""
        if file is None:
            print(self.to_json())
        else:
            file.write(self.to_json())


def report_suggestions(report: TrajectoryReport) -> list[str]:
    """Next steps that would make the report more trustworthy."""
    suggestions = []
    if report.used_fallback_tdee:
        suggestions.append(
            f"TDEE fell back to {report.baseline_tdee:.0f} kcal/day; log at least two "
            f"weigh-ins on different days to estimate it from your own data"
        )
    elif report.estimate and report.estimate.weeks_analyzed < report.window_weeks:
        suggestions.append(
            f"Keep logging: the estimate covers {report.estimate.weeks_analyzed:g} of "
            f"{report.window_weeks:g} weeks"
        )
    if not report.projection:
        suggestions.append(
            "Current weight is at or below every phase bound; add a lower phase to keep projecting"
        )
    return suggestions


def from_report(
    command: str,
    report: TrajectoryReport,
    data: dict[str, Any],
    human_summary: str = "",
) -> AgentResponse:
    """Successful response for a command that ran the pipeline.

    Args:
        command: The command that was executed, e.g. "estimate"
        report: Pipeline output; its notes become warnings
        data: The slice of the report this command returns
        human_summary: One-line description for humans

    Returns:
        AgentResponse with success=True
    """
    return AgentResponse(
        success=True,
        command=command,
        data=data,
        warnings=list(report.notes),
        suggestions=report_suggestions(report),
        human_summary=human_summary,
    )


def create_response(
    command: str,
    data: Optional[dict[str, Any]] = None,
    human_summary: str = "",
) -> AgentResponse:
    """Successful response for commands that do not run the pipeline."""
    return AgentResponse(
        success=True,
        command=command,
        data=data or {},
        human_summary=human_summary,
    )


def error_suggestion(error: Exception) -> str:
    """How to fix `error`, based on where it came from."""
    if isinstance(error, PhaseConfigError):
        return (
            "Fix the phases list in config.yaml: each phase needs lower_bound_lbs and a "
            "positive weekly_loss_lbs, with ids increasing and bounds strictly decreasing"
        )
    if isinstance(error, FileNotFoundError):
        return "Check the --data path or data.weighins_path in config.yaml"
    if isinstance(error, OSError):
        return "Check that the output location exists and is writable"
    return "Check the weigh-in CSV: columns date,weight with M/D or YYYY-MM-DD dates"


def error_response(command: str, error: Exception) -> AgentResponse:
    """Failed response carrying the error message and a fix-it suggestion.

    Args:
        command: The command that failed
        error: The exception that stopped it

    Returns:
        AgentResponse with success=False
    """
    message = str(error)
    return AgentResponse(
        success=False,
        command=command,
        data={"error_type": type(error).__name__},
        errors=[message],
        suggestions=[error_suggestion(error)],
        human_summary=f"Error: {message}",
    )
