"""Machine-readable command output."""

from __future__ import annotations

from cutplan.agent.response import (
    AgentResponse,
    create_response,
    error_response,
    from_report,
    report_suggestions,
)

__all__ = [
    "AgentResponse",
    "create_response",
    "error_response",
    "from_report",
    "report_suggestions",
]
